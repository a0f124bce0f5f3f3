import asyncio

import httpx
import pytest

from resultbot.config import settings
from resultbot.emoji import emoji_markup, fetch_custom_emojis
from resultbot.feeds import VARIANTS, FetchFailure, fetch_results
from resultbot.github import CommitLookupFailure, search_commit
from resultbot.http import build_client
from resultbot.icons import NO_CUSTOM_EMOJIS

pytestmark = [pytest.mark.integration]

SERENITY = '0123456789abcdef0123456789abcdef01234567'

FEED = [
    {
        'commit_timestamp': 1,
        'run_timestamp': 2,
        'versions': {'serenity': 'aaa', 'libjs-test262': 'bbb'},
        'tests': {'test262': {'duration': 1.5, 'results': {'total': 2, 'passed': 1, 'failed': 1}}},
    },
    {
        'commit_timestamp': 3,
        'run_timestamp': 4,
        'versions': {'serenity': 'ccc'},
        'tests': {},
    },
]


def _call(handler, make_call):
    async def main():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await make_call(client)

    return asyncio.run(main())


def test_fetch_results_parses_runs_in_order():
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, json=FEED)

    results = _call(handler, lambda client: fetch_results(client, VARIANTS['test262']))

    assert requested == [VARIANTS['test262'].url]
    assert [result.primary_commit for result in results] == ['aaa', 'ccc']
    assert list(results[0].versions) == ['serenity', 'libjs-test262']
    assert list(results[0].tests['test262'].results) == ['total', 'passed', 'failed']


@pytest.mark.parametrize(
    'response',
    [
        httpx.Response(500, text='oops'),
        httpx.Response(404, text='missing'),
        httpx.Response(200, text='not json'),
        httpx.Response(200, json={'not': 'a list'}),
        httpx.Response(200, json=[{'run_timestamp': 'soon'}]),
    ],
)
def test_fetch_results_failures(response):
    with pytest.raises(FetchFailure):
        _call(lambda request: response, lambda client: fetch_results(client, VARIANTS['testwasm']))


def test_fetch_results_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError('connection refused', request=request)

    with pytest.raises(FetchFailure):
        _call(handler, lambda client: fetch_results(client, VARIANTS['test262']))


def test_search_commit_prefers_github_login():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == f'/repos/{settings.github_repository}/commits/{SERENITY}'
        return httpx.Response(
            200,
            json={
                'sha': SERENITY,
                'commit': {'author': {'name': 'Andreas Kling'}, 'message': 'LibJS: Faster\n\nDetails here.'},
                'author': {
                    'login': 'awesomekling',
                    'html_url': 'https://github.com/awesomekling',
                    'avatar_url': 'https://avatars.example/1',
                },
            },
        )

    commit = _call(handler, lambda client: search_commit(client, SERENITY))

    assert commit.author_name == 'awesomekling'
    assert commit.author_url == 'https://github.com/awesomekling'
    assert commit.avatar_url == 'https://avatars.example/1'
    assert commit.title == 'LibJS: Faster'


def test_search_commit_falls_back_to_git_author():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={'sha': SERENITY, 'commit': {'author': {'name': 'Jane Doe'}, 'message': 'Fix'}, 'author': None},
        )

    commit = _call(handler, lambda client: search_commit(client, SERENITY))

    assert commit.author_name == 'Jane Doe'
    assert commit.author_url is None
    assert commit.avatar_url is None


@pytest.mark.parametrize('status_code', [404, 422])
def test_search_commit_not_found(status_code):
    commit = _call(
        lambda request: httpx.Response(status_code, json={'message': 'No commit found'}),
        lambda client: search_commit(client, SERENITY),
    )
    assert commit is None


def test_search_commit_server_error():
    with pytest.raises(CommitLookupFailure):
        _call(lambda request: httpx.Response(503), lambda client: search_commit(client, SERENITY))


def test_search_commit_sends_token(monkeypatch):
    monkeypatch.setattr(settings, 'github_token', 'ghp_test')
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen['authorization'] = request.headers.get('authorization')
        return httpx.Response(404)

    _call(handler, lambda client: search_commit(client, SERENITY))

    assert seen['authorization'] == 'Bearer ghp_test'


def test_custom_emojis_skipped_without_configuration(monkeypatch):
    monkeypatch.setattr(settings, 'discord_bot_token', '')

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError('no request expected')

    assert _call(handler, fetch_custom_emojis) is NO_CUSTOM_EMOJIS


def test_custom_emojis_resolved_from_guild(monkeypatch):
    monkeypatch.setattr(settings, 'discord_bot_token', 'bot-token')
    monkeypatch.setattr(settings, 'discord_guild_id', '42')

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith('/guilds/42/emojis')
        assert request.headers['authorization'] == 'Bot bot-token'
        return httpx.Response(
            200,
            json=[
                {'id': '1', 'name': 'ladybird'},
                {'id': '2', 'name': 'makemore', 'animated': True},
                {'id': '3', 'name': 'unrelated'},
            ],
        )

    emojis = _call(handler, fetch_custom_emojis)

    assert emojis.ladybird == '<:ladybird:1>'
    assert emojis.makemore == '<a:makemore:2>'
    assert emojis.sadcaret is None
    assert emojis.sad_caret == ':^('


def test_custom_emoji_lookup_failure_falls_back(monkeypatch):
    monkeypatch.setattr(settings, 'discord_bot_token', 'bot-token')
    monkeypatch.setattr(settings, 'discord_guild_id', '42')

    assert _call(lambda request: httpx.Response(403), fetch_custom_emojis) is NO_CUSTOM_EMOJIS


def test_emoji_markup_requires_id_and_name():
    assert emoji_markup({'id': None, 'name': 'ladybird'}) is None
    assert emoji_markup({'id': '7', 'name': 'sadcaret'}) == '<:sadcaret:7>'


def test_build_client_uses_configured_timeout(monkeypatch):
    monkeypatch.setattr(settings, 'http_timeout_seconds', 7.5)

    async def main():
        async with build_client() as client:
            return client.timeout.read, client.follow_redirects

    assert asyncio.run(main()) == (7.5, True)
