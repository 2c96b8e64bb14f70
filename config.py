import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-for-demo'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///table_insights.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    OPENAI_API_KEY = os.environ.get('OPENAI_API_KEY')
    OPENAI_MODEL = os.environ.get('OPENAI_MODEL') or 'gpt-4-turbo-preview'
    MAX_INGEST_LINES = int(os.environ.get('MAX_INGEST_LINES') or 50000)
    MAX_ROWS_TO_SEND = int(os.environ.get('MAX_ROWS_TO_SEND') or 50)
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'

class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    OPENAI_API_KEY = None
    MAX_INGEST_LINES = 1000
