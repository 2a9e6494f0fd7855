# sender.py: Posts two encoded live images to the BWS LiveDetection
# extension and hands back the raw response
import logging
from typing import Tuple

import requests
from requests.auth import HTTPBasicAuth

from liveness_client.errors import TransportError
from liveness_client.settings import Configuration

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json;charset=utf-8"


def http_client() -> requests.Session:
    # should be re-used for further calls
    session = requests.Session()
    session.headers.update({"Content-Type": CONTENT_TYPE})
    return session


def build_url(config: Configuration) -> str:
    if config.detailed:
        return config.endpoint + "?state=true"
    return config.endpoint


def send_request(client: requests.Session, config: Configuration,
                 liveimage1: str, liveimage2: str) -> Tuple[int, bytes]:
    """
    POST both images and return the status code with the raw body.

    The status code is not interpreted here.

    Raises:
        TransportError: If no HTTP response was received
    """
    url = build_url(config)
    payload = {
        "liveimage1": liveimage1,
        "liveimage2": liveimage2,
    }

    logger.info("Sending live detection request to %s", url)
    try:
        response = client.post(
            url,
            json=payload,
            headers={"Content-Type": CONTENT_TYPE},
            auth=HTTPBasicAuth(config.app_id, config.app_secret),
            timeout=config.timeout,
        )
    except requests.exceptions.Timeout as e:
        raise TransportError(
            f"Request to API endpoint timed out after {config.timeout:g}s. {e}") from e
    except requests.exceptions.RequestException as e:
        raise TransportError(f"Error sending request to API endpoint. {e}") from e

    try:
        body = response.content
    except requests.exceptions.RequestException as e:
        raise TransportError(f"Could not read response body. {e}") from e
    finally:
        response.close()

    logger.info("Received http response code %d (%d bytes)", response.status_code, len(body))
    return response.status_code, body
