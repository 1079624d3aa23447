# config.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

class Config:
    # Where translations come from: 'local', 'http' or 'supabase'
    CONTENT_SOURCE = os.getenv('BIBLE_CONTENT_SOURCE', 'local')
    BIBLE_DATA_DIR = os.getenv('BIBLE_DATA_DIR', os.path.join(BASE_DIR, 'bible_data'))
    BIBLE_API_URL = os.getenv('BIBLE_API_URL')
    SUPABASE_VERSES_TABLE = os.getenv('SUPABASE_VERSES_TABLE', 'bible_verses')

    DEFAULT_TRANSLATION = os.getenv('DEFAULT_TRANSLATION', 'kjv')
    TRANSLATION_LOAD_TIMEOUT = float(os.getenv('TRANSLATION_LOAD_TIMEOUT', '30'))
    AVAILABLE_VERSIONS = {
        'kjv': 'King James Version',
        'asv': 'American Standard Version'
    }

    SEARCH_RESULT_LIMIT = int(os.getenv('SEARCH_RESULT_LIMIT', '20'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
