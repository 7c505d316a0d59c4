import logging

import requests
import urllib3

logger = logging.getLogger(__name__)

# Atlas servers are usually on-premise with self-signed certificates
VERIFY_SSL = False
if not VERIFY_SSL:
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


class UnreachableStyleError(Exception):
    def __init__(self, index, url, detail):
        self.index = index
        self.url = url
        self.detail = detail
        super().__init__(f"URL {index} is incorrect ({detail}): {url}")


def check_styles(urls, session=None, timeout=30):
    """GET every style URL and fail on the first one that does not answer 200."""
    if session is None:
        with requests.Session() as http:
            return check_styles(urls, session=http, timeout=timeout)
    for index, url in enumerate(urls):
        logger.info(f"Checking style URL {index}")
        try:
            response = session.get(url, verify=VERIFY_SSL, timeout=timeout)
        except requests.RequestException as e:
            raise UnreachableStyleError(index, url, str(e)) from e
        if response.status_code != 200:
            raise UnreachableStyleError(index, url, f"HTTP {response.status_code}")
