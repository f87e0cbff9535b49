from checklinks.core.logging import setup as setup_logging
from checklinks.services.crawl.cli import app


def main():
    setup_logging()
    app()
