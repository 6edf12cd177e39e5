import json
import threading
from unittest.mock import MagicMock

import pytest
import requests

from relnote.config import Config
from relnote.errors import TransportError
from relnote.github import GitHubClient

API = "https://api.github.com"


def make_response(payload, status=200, next_url=None):
    resp = requests.Response()
    resp.status_code = status
    resp._content = json.dumps(payload).encode('utf-8')
    if next_url:
        resp.headers['Link'] = f'<{next_url}>; rel="next", <{next_url}>; rel="last"'
    return resp


def make_client(responses, token="secret"):
    session = requests.Session()
    session.get = MagicMock(side_effect=responses)
    config = Config(owner="grpc", repo="grpc-go", github_token=token)
    return GitHubClient(config, session_factory=lambda: session), session


def issue_payload(number, pull_request=True):
    data = {
        "number": number,
        "title": f"Issue {number}",
        "state": "closed",
        "html_url": f"https://github.com/grpc/grpc-go/pull/{number}",
        "user": {"login": "carol", "html_url": "https://github.com/carol", "avatar_url": "https://a/carol"},
        "labels": [{"name": "Type: Bug"}],
        "milestone": {"number": 14, "title": "1.3 Release", "state": "closed"},
        "closed_at": "2019-03-01T10:00:00Z",
    }
    if pull_request:
        data["pull_request"] = {"url": f"{API}/repos/grpc/grpc-go/pulls/{number}"}
    return data


def test_token_sets_authorization_header():
    client, session = make_client([])
    assert client.session is session
    assert session.headers['Authorization'] == "token secret"


def test_no_token_is_unauthenticated():
    client, _ = make_client([], token=None)
    assert 'Authorization' not in client.session.headers


def test_requires_owner_and_repo():
    with pytest.raises(ValueError):
        GitHubClient(Config(owner="grpc"))


def test_list_closed_issues_follows_pages():
    next_url = f"{API}/repos/grpc/grpc-go/issues?page=2"
    client, session = make_client([
        make_response([issue_payload(1), issue_payload(2, pull_request=False)], next_url=next_url),
        make_response([issue_payload(3)]),
    ])

    issues = client.list_closed_issues(milestone=14)

    assert [i.number for i in issues] == [1, 2, 3]
    assert issues[1].pull_request is None
    assert issues[0].pull_request is not None
    assert issues[0].labels[0].name == "Type: Bug"
    assert issues[0].milestone.title == "1.3 Release"
    assert issues[0].closed_at.year == 2019
    assert issues[0].user.avatar_url == "https://a/carol"

    first_call, second_call = session.get.call_args_list
    assert first_call.args[0] == f"{API}/repos/grpc/grpc-go/issues"
    assert first_call.kwargs['params'] == {'state': 'closed', 'milestone': '14', 'per_page': 100}
    assert second_call.args[0] == next_url
    assert second_call.kwargs['params'] is None


def test_list_closed_issues_by_label():
    client, session = make_client([make_response([])])
    assert client.list_closed_issues(labels="1.7") == []
    assert session.get.call_args.kwargs['params']['labels'] == "1.7"


def test_list_milestones_all_states():
    client, session = make_client([make_response([
        {"number": 9, "title": "1.2 Release", "state": "closed"},
        {"number": 14, "title": "1.3 Release", "state": "open"},
    ])])
    milestones = client.list_milestones()
    assert [(m.title, m.number) for m in milestones] == [("1.2 Release", 9), ("1.3 Release", 14)]
    assert session.get.call_args.kwargs['params']['state'] == 'all'


def test_list_issue_events_and_get_commit():
    client, session = make_client([
        make_response([{"event": "merged", "commit_id": "abc", "created_at": "2019-03-01T10:00:00Z"}]),
        make_response({"sha": "abc", "commit": {"message": "Fix race (#482)\n\nbody"}}),
    ])
    events = client.list_issue_events(482)
    assert events[0].event == "merged"
    commit = client.get_commit(events[0].commit_id)
    assert commit.first_line == "Fix race (#482)"
    assert session.get.call_args.args[0] == f"{API}/repos/grpc/grpc-go/commits/abc"


def test_list_org_members_exhausts_pages():
    client, session = make_client([
        make_response([{"login": "alice"}], next_url=f"{API}/orgs/grpc/members?page=2"),
        make_response([{"login": "bob"}], next_url=f"{API}/orgs/grpc/members?page=3"),
        make_response([{"login": "dave"}]),
    ])
    assert client.list_org_members("grpc") == ["alice", "bob", "dave"]
    assert session.get.call_count == 3


def test_http_error_raises_transport_error():
    client, _ = make_client([make_response({"message": "Not Found"}, status=404)])
    with pytest.raises(TransportError) as excinfo:
        client.get_commit("missing")
    assert excinfo.value.status_code == 404


def test_connection_error_raises_transport_error():
    client, _ = make_client([requests.ConnectionError("refused")])
    with pytest.raises(TransportError) as excinfo:
        client.list_milestones()
    assert excinfo.value.status_code is None


def test_each_thread_gets_its_own_session():
    built = []

    def factory():
        session = requests.Session()
        built.append(session)
        return session

    client = GitHubClient(Config(owner="grpc", repo="grpc-go", github_token="secret"), session_factory=factory)
    seen = {}

    def worker(name):
        seen[name] = client.session

    threads = [threading.Thread(target=worker, args=(n,)) for n in ("a", "b")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert seen["a"] is not seen["b"]
    assert client.session is client.session
    assert len(built) == 3
    assert all(s.headers['Authorization'] == "token secret" for s in built)
