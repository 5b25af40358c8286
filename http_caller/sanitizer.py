"""
Strip credential query parameters from URLs before they are logged
"""

import re
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

TOKEN_PARAMETERS = ('token', 'access_token')

# token=/access_token= pairs after ?/& or their percent-encoded forms %3F/%26
_TOKEN_VALUE_PATTERN = re.compile(
    r'(?:(?<=[?&])|(?<=%3[Ff])|(?<=%26))'
    r'(?:access_)?token(?:=|%3[Dd])'
    r'(?:(?!%26)[^&#\s\'")])*'
    r'(?:&|%26)?'
)


def remove_token_parameter(url: str) -> str:
    """Return url without its token/access_token query parameters. Only meant for log output.

    A URL urllib cannot split (e.g. a broken IPv6 host) is cleaned as free text
    instead, so logging never raises.
    """
    try:
        parsed = urlsplit(url)
    except ValueError:
        return remove_token_values(url)

    if not parsed.query:
        return url

    query = [
        (key, value)
        for key, value in parse_qsl(parsed.query, keep_blank_values=True)
        if key not in TOKEN_PARAMETERS
    ]

    # a second '?' folds later pairs into a value, where they end up percent-encoded
    return remove_token_values(urlunsplit((
        parsed.scheme,
        parsed.netloc,
        parsed.path,
        urlencode(query),
        parsed.fragment,
    )))


def remove_token_values(text: str) -> str:
    """Drop token=/access_token= query pairs from free text such as transport error messages."""
    return _TOKEN_VALUE_PATTERN.sub('', text)
