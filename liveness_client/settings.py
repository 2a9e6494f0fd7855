"""
Command line parsing into a single immutable Configuration value.

Values given on the command line win over the YAML settings file, which in
turn may pull credentials from the environment (see config/config.yaml).
"""
import argparse
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import yaml

from config.config_loader import ConfigLoader
from liveness_client import __version__
from liveness_client.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://bws.bioid.com/extension/livedetection"
DEFAULT_TIMEOUT = 30.0

USAGE = ("Usage: -BWSAppID <BWSAppID> -BWSAppSecret <BWSAppSecret> "
         "-image1 <image1> -image2 <image2>")


@dataclass(frozen=True)
class Configuration:
    app_id: str
    app_secret: str
    image1_path: str
    image2_path: str
    detailed: bool = False
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self):
        # keep the secret out of logs and tracebacks
        return (f"Configuration(app_id={self.app_id!r}, app_secret='***', "
                f"image1_path={self.image1_path!r}, image2_path={self.image2_path!r}, "
                f"detailed={self.detailed!r}, endpoint={self.endpoint!r}, "
                f"timeout={self.timeout!r})")

    def validate(self):
        """Raise ConfigurationError unless every required value is non-empty."""
        missing = [
            name for name in ("app_id", "app_secret", "image1_path", "image2_path")
            if not getattr(self, name)
        ]
        if missing:
            logger.debug("Missing required settings: %s", ", ".join(missing))
            raise ConfigurationError(USAGE)
        return self


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bws-livedetection",
        description=f"BioIDWebService LiveDetection Sample in Python. Version: {__version__}",
        allow_abbrev=False,
    )
    parser.add_argument("-BWSAppID", dest="app_id", default="",
                        help="BioIDWebService AppID")
    parser.add_argument("-BWSAppSecret", dest="app_secret", default="",
                        help="BioIDWebService AppSecret")
    parser.add_argument("-image1", dest="image1", default="",
                        help="1st source image")
    parser.add_argument("-image2", dest="image2", default="",
                        help="2nd source image")
    parser.add_argument("-detailedResponse", dest="detailed", action="store_true",
                        help="Return detailed JSON output of response")
    parser.add_argument("-config", dest="config", default=None,
                        help="YAML settings file (default: config/config.yaml)")
    parser.add_argument("-version", action="version", version=__version__)
    return parser


def load_configuration(argv: Optional[Sequence[str]] = None) -> Configuration:
    """Parse argv and the settings file into a validated Configuration."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(args.config)
    try:
        loader.load()
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not load settings: {e}") from e

    timeout = loader.get("service.timeout", DEFAULT_TIMEOUT)
    config = Configuration(
        app_id=args.app_id or str(loader.get("service.app_id", "")),
        app_secret=args.app_secret or str(loader.get("service.app_secret", "")),
        image1_path=args.image1,
        image2_path=args.image2,
        detailed=args.detailed,
        endpoint=str(loader.get("service.endpoint", DEFAULT_ENDPOINT)),
        timeout=float(timeout),
    )
    return config.validate()
