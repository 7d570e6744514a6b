"""Property-based tests for git remote parsing."""

from hypothesis import given
from hypothesis import strategies as st

from cilint.git import parse_remote_url

labels = st.from_regex(r"[a-z0-9]([a-z0-9-]{0,10}[a-z0-9])?", fullmatch=True)
hosts = st.lists(labels, min_size=1, max_size=4).map(".".join)
segments = st.from_regex(r"[A-Za-z0-9_][A-Za-z0-9_.-]{0,12}", fullmatch=True).filter(
    lambda s: not s.endswith(".git")
)
project_paths = st.lists(segments, min_size=1, max_size=5).map("/".join)


@given(
    scheme=st.sampled_from(["http", "https"]),
    host=hosts,
    port=st.none() | st.integers(min_value=1, max_value=65535),
    path=project_paths,
    suffix=st.sampled_from(["", ".git", "/"]),
)
def test_http_remote(
    scheme: str, host: str, port: int | None, path: str, suffix: str
) -> None:
    authority = host if port is None else f"{host}:{port}"

    result = parse_remote_url(f"{scheme}://{authority}/{path}{suffix}")

    assert result.root_url == f"{scheme}://{authority}"
    assert result.project_path == path


@given(
    user=st.sampled_from(["", "git@", "deploy@"]),
    host=hosts,
    path=project_paths,
    suffix=st.sampled_from(["", ".git"]),
)
def test_scp_remote(user: str, host: str, path: str, suffix: str) -> None:
    result = parse_remote_url(f"{user}{host}:{path}{suffix}")

    assert result.root_url == f"https://{host}"
    assert result.project_path == path


@given(host=hosts, path=project_paths)
def test_project_path_never_has_git_suffix_or_edge_slashes(
    host: str, path: str
) -> None:
    for remote in (f"git@{host}:{path}.git", f"https://{host}/{path}.git/"):
        project_path = parse_remote_url(remote).project_path

        assert not project_path.endswith(".git")
        assert not project_path.startswith("/")
        assert not project_path.endswith("/")


@given(
    scheme=st.sampled_from(["http", "https"]),
    user=st.from_regex(r"[A-Za-z0-9_.-]{1,20}", fullmatch=True),
    password=st.none() | st.from_regex(r"[A-Za-z0-9_.~-]{1,30}", fullmatch=True),
    host=hosts,
    path=project_paths,
)
def test_http_remote_credentials_never_reach_root_url(
    scheme: str, user: str, password: str | None, host: str, path: str
) -> None:
    userinfo = user if password is None else f"{user}:{password}"

    result = parse_remote_url(f"{scheme}://{userinfo}@{host}/{path}.git")

    assert result.root_url == f"{scheme}://{host}"
    assert "@" not in result.root_url
    assert result.project_path == path
