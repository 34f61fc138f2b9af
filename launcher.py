from search6_cli import __version__
from search6_cli.cli import main
from search6_cli.logger import logger

if __name__ == "__main__":
    logger.debug("Starting search6 lookup version %s", __version__)
    raise SystemExit(main())
