from dataclasses import dataclass
from typing import List, Optional

TOKEN_MARKER = 'access_token='
SCHEMES = ('http:', 'https:')


class MalformedUrlError(Exception):
    def __init__(self, url: str, reason: str, index: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.index = index
        where = f"Style URL {index}" if index is not None else "Style URL"
        super().__init__(f"{where} is malformed ({reason}): {url}")


@dataclass(frozen=True)
class StyleDescriptor:
    """The parts of one Atlas style URL.

    Atlas style URLs have the shape
    ``scheme://host[:port]/api1/api2/username/style.ext?access_token=TOKEN[#fragment]``.
    """
    scheme: str
    server: str
    port: str
    api_path: str
    username: str
    style_id: str
    token: str

    @property
    def server_url(self) -> str:
        return f"{self.scheme}//{self.server}"

    @property
    def style_url(self) -> str:
        return f"mapbox://styles/{self.username}/{self.style_id}"

    @property
    def url_format(self) -> str:
        # {L}, {Z}, {X}, {Y} and {D} are filled in by Tableau at request time
        return (f"/{self.api_path}/{self.username}/{{L}}/tiles/{{Z}}/{{X}}/{{Y}}{{D}}"
                f"?access_token={self.token}")


def decompose(url: str) -> StyleDescriptor:
    parts = url.split('/')
    if len(parts) < 7:
        raise MalformedUrlError(url, f"expected at least 7 '/'-separated segments, got {len(parts)}")

    scheme = parts[0]
    if scheme not in SCHEMES:
        raise MalformedUrlError(url, f"unsupported scheme {scheme!r}")

    host, _, explicit_port = parts[2].partition(':')
    if not host:
        raise MalformedUrlError(url, "missing host")
    if scheme == 'https:':
        port = '443'
    else:
        port = explicit_port or '80'
    if not port.isdigit():
        raise MalformedUrlError(url, f"port {port!r} is not numeric")

    username = parts[5]
    if not username:
        raise MalformedUrlError(url, "missing username")

    tail = parts[6]
    if TOKEN_MARKER not in tail:
        raise MalformedUrlError(url, f"no {TOKEN_MARKER} parameter")

    style_id = tail.split('.')[0]
    if not style_id or '?' in style_id or '=' in style_id:
        raise MalformedUrlError(url, "cannot read a style id before the first '.'")

    token = tail.split(TOKEN_MARKER, 1)[1].split('#')[0].split('&')[0]
    if not token:
        raise MalformedUrlError(url, "empty access token")

    return StyleDescriptor(
        scheme=scheme,
        server=host,
        port=port,
        api_path=f"{parts[3]}/{parts[4]}",
        username=username,
        style_id=style_id,
        token=token,
    )


def decompose_all(urls: List[str]) -> List[StyleDescriptor]:
    """Decompose every URL, reporting the list index of the first bad one."""
    styles = []
    for index, url in enumerate(urls):
        try:
            styles.append(decompose(url))
        except MalformedUrlError as e:
            raise MalformedUrlError(e.url, e.reason, index=index) from e
    return styles
