import os
from flask import Flask
import logging
from logging.handlers import RotatingFileHandler
from config import BASE_DIR


def create_app(config_object='config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_object)

    if not app.debug and not app.testing:
        logs_dir = os.path.join(BASE_DIR, 'logs')
        log_file = os.path.join(logs_dir, 'app.log')

        if not os.path.exists(logs_dir):
            os.makedirs(logs_dir)

        file_handler = RotatingFileHandler(log_file, maxBytes=10240, backupCount=10)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Приложение Group Schedule запущено')

        if not app.config.get('GROUPS'):
            app.logger.warning('Не задано ни одной группы (SCHEDULE_GROUP_1, ...) в .env')

    from . import api_routes
    app.register_blueprint(api_routes.bp)

    return app
