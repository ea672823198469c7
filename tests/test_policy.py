import pytest

from butler.crawler.policy import EXTERNAL_DOMAIN, AdmissionPolicy, canonical_host

HOSTS = ["example.com", "www.example.com", "WWW.Example.COM", "www.www.example.com", "wwwexample.com", "localhost:8080"]


@pytest.mark.parametrize("allow_www", [True, False])
@pytest.mark.parametrize("host", HOSTS)
def test_canonical_host_is_idempotent(host, allow_www):
    once = canonical_host(host, allow_www)
    assert canonical_host(once, allow_www) == once


@pytest.mark.parametrize(
    "host,allow_www,expected",
    [
        ("example.com", False, "example.com"),
        ("www.example.com", False, "example.com"),
        ("example.com", True, "www.example.com"),
        ("www.example.com", True, "www.example.com"),
        ("wwwexample.com", True, "www.wwwexample.com"),
        ("Example.COM", False, "example.com"),
    ],
)
def test_canonical_host(host, allow_www, expected):
    assert canonical_host(host, allow_www) == expected


def test_allow_stores_canonical_form():
    policy = AdmissionPolicy(allow_www=True)
    assert policy.allow("example.com") == "www.example.com"
    assert policy.is_allowed("www.example.com")
    assert not policy.is_allowed("example.com")


def test_check_reasons():
    policy = AdmissionPolicy()
    policy.allow("example.com")

    assert policy.check("http", "example.com") is None
    assert policy.check("https", "example.com") == "wrong scheme: https"
    assert policy.check("http", "other.com") == EXTERNAL_DOMAIN
    # scheme is checked before the domain
    assert policy.check("ftp", "other.com") == "wrong scheme: ftp"


def test_extra_schemes():
    policy = AdmissionPolicy(schemes=("http", "https"))
    policy.allow("example.com")
    assert policy.check("https", "example.com") is None


def test_repeated_www_prefix_collapses():
    assert canonical_host("www.www.example.com", False) == "example.com"
    assert canonical_host("www.www.example.com", True) == "www.www.example.com"
