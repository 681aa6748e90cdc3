import logging
import os

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

load_dotenv()

app = Flask(__name__)
CORS(app)

app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv('DATABASE_URL', 'sqlite:///baroform.db')
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
app.config['SLACK_WEBHOOK_URL'] = os.getenv('SLACK_WEBHOOK_URL', '')
app.config['PAGE_SIZE'] = int(os.getenv('PAGE_SIZE', 10))
app.config['DISPLAY_TIMEZONE'] = os.getenv('DISPLAY_TIMEZONE', 'Asia/Seoul')
app.json.ensure_ascii = False
app.secret_key = os.getenv('SECRET_KEY', 'dev')

app.logger.setLevel(getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO))

db = SQLAlchemy(app)
migrate = Migrate(app, db)

from baroform import routes, models
