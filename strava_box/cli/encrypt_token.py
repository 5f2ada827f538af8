import argparse
import sys

from ..exceptions import StravaBoxError
from ..token_cipher import encrypt_token, generate_key
from ..utils import load_env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Encrypt a Strava refresh token for the token gist.")
    parser.add_argument("refresh_token", nargs="?", help="strava refresh token (default: STRAVA_REFRESH_TOKEN)")
    parser.add_argument("--key", dest="key", help="encryption key (default: STRAVA_TOKEN_KEY)")
    parser.add_argument(
        "--generate-key",
        dest="generate_key",
        action="store_true",
        help="print a new encryption key and exit",
    )
    return parser


def main(argv=None) -> None:
    parser = build_parser()
    options = parser.parse_args(argv)
    if options.generate_key:
        print(generate_key())
        return

    env_config = load_env_config()
    refresh_token = options.refresh_token or env_config.get("strava_refresh_token")
    key = options.key or env_config.get("strava_token_key")
    if not refresh_token or not key:
        print("Missing refresh token or key. Provide them as arguments or in .env.local file")
        sys.exit(1)

    try:
        print(encrypt_token(refresh_token, key))
    except StravaBoxError as e:
        print(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
