import asyncio

import pytest

from butler.crawler.frontier import Frontier, InvalidLinkError, parse_link
from butler.crawler.models import Admission, Task
from butler.crawler.policy import AdmissionPolicy
from butler.crawler.tracker import CompletionTracker
from butler.report import ReporterGroup


def build_frontier(recorder, allow_www=False, domains=("example.com",)):
    policy = AdmissionPolicy(allow_www)
    for domain in domains:
        policy.allow(domain)
    return Frontier(policy, CompletionTracker(), ReporterGroup([recorder]))


@pytest.fixture()
def frontier(recorder):
    return build_frontier(recorder)


def test_admit_enqueues_allowed_link(frontier, recorder):
    assert frontier.admit("http://example.com/") is Admission.ENQUEUED
    assert frontier.tracker.pending == 1
    assert frontier.pending == 1
    assert recorder.events == []


def test_duplicate_is_silent(frontier, recorder):
    frontier.admit("http://example.com/a")
    assert frontier.admit("http://example.com/a") is Admission.DUPLICATE
    assert frontier.tracker.pending == 1
    assert recorder.events == []


def test_fragment_is_stripped(frontier):
    assert frontier.normalize("http://example.com/x#frag") == frontier.normalize("http://example.com/x")
    assert frontier.admit("http://example.com/x#frag") is Admission.ENQUEUED
    assert frontier.admit("http://example.com/x") is Admission.DUPLICATE


def test_empty_path_becomes_slash(frontier):
    assert frontier.normalize("http://example.com") == "http://example.com/"
    frontier.admit("http://example.com")
    assert "http://example.com/" in frontier


def test_relative_link_resolved_against_base(frontier):
    base = "http://example.com/dir/page"
    assert frontier.normalize("about", base) == "http://example.com/dir/about"
    assert frontier.normalize("../up?q=1#x", base) == "http://example.com/up?q=1"
    assert frontier.normalize("//www.example.com", base) == "http://example.com/"


def test_query_is_part_of_the_key(frontier):
    frontier.admit("http://example.com/list?page=1")
    assert frontier.admit("http://example.com/list?page=2") is Admission.ENQUEUED


def test_www_stripped_when_not_allowed(frontier):
    assert frontier.admit("http://WWW.Example.com/a") is Admission.ENQUEUED
    assert "http://example.com/a" in frontier


def test_www_added_when_allowed(recorder):
    frontier = build_frontier(recorder, allow_www=True)
    assert frontier.policy.domains == frozenset({"www.example.com"})
    assert frontier.normalize("http://example.com/") == "http://www.example.com/"
    assert frontier.admit("http://example.com/") is Admission.ENQUEUED
    assert frontier.admit("http://www.example.com/") is Admission.DUPLICATE


def test_userinfo_is_kept(frontier):
    assert frontier.normalize("http://user@www.example.com/") == "http://user@example.com/"


@pytest.mark.parametrize(
    "link,reason",
    [
        ("https://example.com/x", "wrong scheme: https"),
        ("ftp://example.com/file", "wrong scheme: ftp"),
        ("mailto:me@example.com", "wrong scheme: mailto"),
        ("http://other.com/", "external domain"),
        ("http://example.com:8080/", "external domain"),
    ],
)
def test_rejected_links_are_reported_ignored(frontier, recorder, link, reason):
    assert frontier.admit(link) is Admission.IGNORED
    assert recorder.of("ignored") == [("ignored", frontier.normalize(link), 0, reason)]
    assert frontier.tracker.pending == 0
    assert frontier.pending == 0


def test_rejected_link_reported_once(frontier, recorder):
    frontier.admit("http://other.com/")
    frontier.admit("http://other.com/#again")
    assert len(recorder.of("ignored")) == 1


def test_admission_is_total(frontier, recorder):
    links = [
        "http://example.com/",
        "http://example.com/#a",
        "https://example.com/",
        "http://other.com/",
        "http://example.com/b",
        "http://other.com/",
        "javascript:void(0)",
    ]
    outcomes = [frontier.admit(link) for link in links]

    enqueued = outcomes.count(Admission.ENQUEUED)
    ignored = outcomes.count(Admission.IGNORED)
    assert enqueued + ignored + outcomes.count(Admission.DUPLICATE) == len(links)
    assert enqueued == frontier.tracker.pending == frontier.pending == 2
    assert ignored == len(recorder.of("ignored")) == 3


@pytest.mark.parametrize("raw", ["http://[::1", "http://example.com:99999/", "http://example.com:port/"])
def test_parse_link_rejects_malformed(raw):
    with pytest.raises(InvalidLinkError):
        parse_link(raw)


def test_admit_rejects_malformed(frontier, recorder):
    with pytest.raises(InvalidLinkError):
        frontier.admit("http://[::1/", base="http://example.com/")
    assert recorder.events == []
    assert len(frontier) == 0


@pytest.mark.asyncio()
async def test_interleaved_admits_enqueue_once_and_wake_waiting_worker(frontier):
    waiting = asyncio.create_task(frontier.get())
    await asyncio.sleep(0)

    variants = ["http://example.com/page", "http://example.com/page#a", "http://www.example.com/page"]

    async def admit_all(links):
        outcomes = []
        for link in links:
            outcomes.append(frontier.admit(link))
            await asyncio.sleep(0)
        return outcomes

    batches = await asyncio.gather(*(admit_all(variants * 50) for _ in range(8)))
    outcomes = [o for batch in batches for o in batch]

    assert outcomes.count(Admission.ENQUEUED) == 1
    assert outcomes.count(Admission.DUPLICATE) == len(outcomes) - 1
    task = await asyncio.wait_for(waiting, timeout=1)
    assert task.url == "http://example.com/page"
    assert frontier.tracker.pending == 1
    assert frontier.pending == 0


@pytest.mark.asyncio()
async def test_get_returns_enqueued_tasks(frontier):
    for path in ("/a/long/path", "/", "/b"):
        frontier.admit(f"http://example.com{path}")

    tasks = [await asyncio.wait_for(frontier.get(), timeout=1) for _ in range(3)]

    assert {t.url for t in tasks} == {
        "http://example.com/a/long/path",
        "http://example.com/",
        "http://example.com/b",
    }


def test_task_orders_by_url_length():
    assert Task.for_url("http://a.com/") < Task.for_url("http://a.com/longer")
    assert Task.for_url("http://a.com/x").priority == len("http://a.com/x")
