import argparse
import sys

from ..box_core.config import CredentialInput, resolve_publisher_config
from ..box_core.publish import run_publish
from ..exceptions import StravaBoxError
from ..utils import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        description="Publish your most recent Strava activities to a GitHub gist. "
        "Configuration is read from the environment and .env.local."
    )


def main(argv=None) -> None:
    parser = build_parser()
    parser.parse_args(argv)
    try:
        config = resolve_publisher_config(CredentialInput())
        run_publish(config)
    except StravaBoxError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
