"""Personal access token lookup in .netrc.

GitLab does not accept tokens through basic auth, so the token is read from
the ``account`` field of a named machine entry, leaving ``login`` and
``password`` free for other tools. The ``default`` entry is never used::

    machine gitlab.com
        login someone
        account MY_PERSONAL_ACCESS_TOKEN
"""

import netrc
import os
import sys
from pathlib import Path
from urllib.parse import urlsplit

from structlog.typing import FilteringBoundLogger

_DEFAULT_ENTRY = "default"


def get_netrc_path(netrc_file: Path | None = None) -> Path | None:
    """Return the .netrc file to read, or None if there is none.

    The explicit path wins, then ``$NETRC``, then ``~/.netrc`` (``~/_netrc``
    on Windows). Missing paths and directories are ignored.
    """
    if netrc_file is not None:
        path = netrc_file
    elif env_path := os.environ.get("NETRC"):
        path = Path(env_path)
    else:
        filename = "_netrc" if sys.platform == "win32" else ".netrc"
        path = Path.home() / filename

    path = path.expanduser()
    if not path.is_file():
        return None
    return path


def token_from_netrc(
    root_url: str,
    netrc_file: Path | None = None,
    *,
    logger: FilteringBoundLogger | None = None,
) -> str | None:
    """Find the token for the host of ``root_url`` in .netrc.

    Args:
        root_url: GitLab root URL.
        netrc_file: Explicit .netrc path.
        logger: Optional logger.

    Returns:
        The ``account`` value of the host's entry, or None.
    """
    host = urlsplit(root_url).hostname
    if not host or host == _DEFAULT_ENTRY:
        return None

    path = get_netrc_path(netrc_file)
    if path is None:
        return None

    try:
        entries = netrc.netrc(str(path))
    except (netrc.NetrcParseError, OSError) as e:
        if logger is not None:
            logger.warning("netrc_unreadable", path=str(path), error=str(e))
        return None

    entry = entries.hosts.get(host)
    if entry is None:
        return None

    _login, account, _password = entry
    return account or None


def resolve_token(
    *,
    token: str,
    use_netrc: bool,
    root_url: str,
    netrc_file: Path | None = None,
    logger: FilteringBoundLogger | None = None,
) -> str:
    """Pick the token to authenticate with.

    An explicit token always wins; .netrc is only read when enabled.

    Returns:
        The token, or an empty string for anonymous access.
    """
    if token:
        return token
    if not use_netrc:
        return ""

    found = token_from_netrc(root_url, netrc_file, logger=logger)
    if logger is not None:
        logger.debug("netrc_token_lookup", root_url=root_url, found=found is not None)
    return found or ""
