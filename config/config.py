import os
from dotenv import load_dotenv
from pathlib import Path
from enum import Enum


class SourceId(str, Enum):
    """Supported etymology sources."""
    STRUCTURED = "structured"
    PLAIN = "plain"
    SCRAPE_A = "scrapeA"
    SCRAPE_B = "scrapeB"


# Display name and public page of every source, used by the UI's "open at source" link
SOURCE_INFO = {
    SourceId.STRUCTURED: {
        "name": "nisanyan sözlük",
        "page_url": "https://www.nisanyansozluk.com/kelime/{word}",
    },
    SourceId.PLAIN: {
        "name": "tdk güncel türkçe sözlük",
        "page_url": "https://sozluk.gov.tr/?kelime={word}",
    },
    SourceId.SCRAPE_A: {
        "name": "aksözlük",
        "page_url": "https://aksozluk.org/{word}",
    },
    SourceId.SCRAPE_B: {
        "name": "etimoloji türkçe",
        "page_url": "https://www.etimolojiturkce.com/kelime/{word}",
    },
}

# Upstreams publish at most three numbered homonym pages next to the base page
MAX_HOMONYM_VARIANTS = 3

DEFAULT_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"


class Config:
    """Configuration management for the application."""

    def __init__(self):
        """Initialize configuration with environment variables."""
        # Load environment variables from .env file if it exists
        env_path = Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # Upstream endpoints; {word} is replaced with the adapter's URL-safe form
        self.STRUCTURED_URL_TEMPLATE = os.getenv(
            'STRUCTURED_URL_TEMPLATE',
            'https://www.nisanyansozluk.com/kelime/{word}/__data.json?x-sveltekit-invalidated=001',
        )
        self.PLAIN_URL_TEMPLATE = os.getenv('PLAIN_URL_TEMPLATE', 'https://sozluk.gov.tr/gts?ara={word}')
        self.SCRAPE_A_URL_TEMPLATE = os.getenv('SCRAPE_A_URL_TEMPLATE', 'https://aksozluk.org/{word}')
        self.SCRAPE_B_URL_TEMPLATE = os.getenv(
            'SCRAPE_B_URL_TEMPLATE', 'https://www.etimolojiturkce.com/kelime/{word}'
        )

        # Transport
        self.USER_AGENT = os.getenv('USER_AGENT', DEFAULT_USER_AGENT)
        self.REQUEST_TIMEOUT_S = float(os.getenv('REQUEST_TIMEOUT_S', '12'))
        self.LOOKUP_TIMEOUT_S = float(os.getenv('LOOKUP_TIMEOUT_S', '15'))

        # Number of numbered homonym pages requested next to the base page
        self.HOMONYM_VARIANTS = int(os.getenv('HOMONYM_VARIANTS', '3'))

    def url_templates(self) -> dict[SourceId, str]:
        return {
            SourceId.STRUCTURED: self.STRUCTURED_URL_TEMPLATE,
            SourceId.PLAIN: self.PLAIN_URL_TEMPLATE,
            SourceId.SCRAPE_A: self.SCRAPE_A_URL_TEMPLATE,
            SourceId.SCRAPE_B: self.SCRAPE_B_URL_TEMPLATE,
        }

    def build_url(self, source: SourceId, key: str) -> str:
        """Upstream URL for an already URL-safe lookup key."""
        return self.url_templates()[source].replace('{word}', key)

    def validate(self) -> bool:
        """
        Validate timeouts, variant count and URL templates.

        Returns:
            bool: True if configuration is valid, False otherwise
        """
        from utils.logger import get_logger

        logger = get_logger(__name__)

        if self.REQUEST_TIMEOUT_S <= 0 or self.LOOKUP_TIMEOUT_S <= 0:
            logger.error("Timeouts must be positive")
            return False
        if not 0 <= self.HOMONYM_VARIANTS <= MAX_HOMONYM_VARIANTS:
            logger.error(f"HOMONYM_VARIANTS must be between 0 and {MAX_HOMONYM_VARIANTS}")
            return False
        for source, template in self.url_templates().items():
            if '{word}' not in template:
                logger.error(f"URL template for '{source.value}' has no {{word}} placeholder")
                return False

        return True


def get_config() -> Config:
    """Process-wide configuration (built on first use)."""
    if not hasattr(get_config, "_instance"):
        get_config._instance = Config()
    return get_config._instance
