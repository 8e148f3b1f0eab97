"""
Configuration Management

Handles environment variables and configuration settings for the locchannels application.
"""

import os
import logging
from typing import Dict, Optional
from pathlib import Path
from dotenv import load_dotenv


DEFAULT_CHANNEL_FIELDS = {
    'topic_facet': 'Topic',
    'author_facet': 'Author',
}


def parse_channel_fields(raw: str) -> Dict[str, str]:
    """Parse ``field:Label,field:Label`` into an ordered field table."""
    fields = {}
    for entry in raw.split(','):
        entry = entry.strip()
        if not entry:
            continue
        if ':' in entry:
            field, label = entry.split(':', 1)
        else:
            field, label = entry, entry
        fields[field.strip()] = label.strip()
    return fields


class Config:
    """Configuration management class."""

    def __init__(self, env_file: Optional[str] = None):
        """Initialize configuration from environment variables."""
        # Load .env file if it exists
        if env_file:
            load_dotenv(env_file)
        else:
            env_path = Path('.env')
            if env_path.exists():
                load_dotenv(env_path)

        # Library of Congress API Configuration
        self.loc_base_url = os.getenv('LOC_BASE_URL', 'https://www.loc.gov/')

        # Base URL of the discovery application, used for channel links
        self.app_base_url = os.getenv('APP_BASE_URL', 'http://localhost/')

        try:
            self.request_delay = float(os.getenv('REQUEST_DELAY', '3.0'))
        except ValueError:
            self.request_delay = 3.0

        try:
            self.max_retries = int(os.getenv('MAX_RETRIES', '3'))
        except ValueError:
            self.max_retries = 3

        # Channel selection
        self.channel_fields = parse_channel_fields(os.getenv('CHANNEL_FIELDS', '')) \
            or dict(DEFAULT_CHANNEL_FIELDS)

        try:
            self.max_fields_to_suggest = int(os.getenv('CHANNEL_MAX_FIELDS', '2'))
        except ValueError:
            self.max_fields_to_suggest = 2

        try:
            self.max_values_to_suggest_per_field = int(os.getenv('CHANNEL_MAX_VALUES', '2'))
        except ValueError:
            self.max_values_to_suggest_per_field = 2

        try:
            self.channel_result_limit = int(os.getenv('CHANNEL_RESULT_LIMIT', '20'))
        except ValueError:
            self.channel_result_limit = 20

        # Logging
        self.log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

        if self.request_delay < 0:
            logging.warning("REQUEST_DELAY cannot be negative, using 0")
            self.request_delay = 0.0

    def setup_logging(self):
        """Configure logging based on settings."""
        logging.basicConfig(
            level=getattr(logging, self.log_level, logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[
                logging.StreamHandler(),
                logging.FileHandler('locchannels.log')
            ]
        )

    def get_api_config(self) -> dict:
        """Get API client configuration."""
        return {
            'base_url': self.loc_base_url,
            'request_delay': self.request_delay,
            'max_retries': self.max_retries
        }

    def get_channel_options(self) -> dict:
        """Get channel provider options."""
        return {
            'fields': dict(self.channel_fields),
            'max_fields_to_suggest': self.max_fields_to_suggest,
            'max_values_to_suggest_per_field': self.max_values_to_suggest_per_field
        }

    def get_url_config(self) -> dict:
        """Get URL builder configuration."""
        return {
            'base_url': self.app_base_url
        }


# Global configuration instance
config = Config()
