import logging
import sys
from typing import Optional, Sequence, TextIO

from config.logging_config import setup_logging
from liveness_client.errors import LivenessClientError
from liveness_client.image_encoder import image_to_base64
from liveness_client.processor import process_response
from liveness_client.sender import http_client, send_request
from liveness_client.settings import load_configuration

logger = logging.getLogger("liveness_client")


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    """Run one live detection round trip and return the process exit code."""
    try:
        config = load_configuration(argv)
        logger.debug("Loaded %r", config)

        # Convert images to base64 data URIs
        liveimage1 = image_to_base64(config.image1_path)
        liveimage2 = image_to_base64(config.image2_path)

        with http_client() as client:
            status_code, body = send_request(client, config, liveimage1, liveimage2)

        process_response(status_code, body, config.detailed, out=out)
    except LivenessClientError as e:
        logger.error("%s", e)
        return 1
    return 0


def app_entry():
    setup_logging()
    sys.exit(main())


if __name__ == "__main__":
    app_entry()
