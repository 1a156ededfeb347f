from __future__ import annotations

import base64
from urllib.parse import parse_qsl

import pytest

from adapters import endpoints
from core.domain.models import AccountSettings, Configuration, Limits, Message, Tweet, TweetMedia, User
from core.domain.params import Optionals


def _sent_params(request) -> dict[str, str]:
    if request.method == "GET":
        return dict(parse_qsl(request.url.query.decode(), keep_blank_values=True))
    return dict(parse_qsl(request.content.decode(), keep_blank_values=True))


CASES = [
    (endpoints.mentions, (), "GET", "statuses/mentions_timeline", {}, []),
    (endpoints.user_timeline, ("jack",), "GET", "statuses/user_timeline", {"screen_name": "jack"}, []),
    (endpoints.home_timeline, (), "GET", "statuses/home_timeline", {}, []),
    (endpoints.retweets_of_me, (), "GET", "statuses/retweets_of_me", {}, []),
    (endpoints.update_status, ("hello",), "POST", "statuses/update", {"status": "hello"}, {}),
    (endpoints.retweets, (20,), "GET", "statuses/retweets/20", {}, []),
    (endpoints.get_status, (20,), "GET", "statuses/show", {"id": "20"}, {}),
    (endpoints.destroy_status, (20,), "POST", "statuses/destroy/20", {"id": "20"}, {}),
    (endpoints.retweet, (20,), "POST", "statuses/retweet/20", {"id": "20"}, {}),
    (endpoints.dm_list, (), "GET", "direct_messages", {}, []),
    (endpoints.dm_sent, (), "GET", "direct_messages/sent", {}, []),
    (endpoints.dm, (5,), "GET", "direct_messages/show", {"id": "5"}, {}),
    (endpoints.dm_destroy, (5,), "POST", "direct_messages/destroy", {"id": "5"}, {}),
    (endpoints.dm_send, ("jack", "yo"), "POST", "direct_messages/new", {"screen_name": "jack", "text": "yo"}, {}),
    (endpoints.search_users, ("python",), "GET", "users/search", {"q": "python"}, []),
    (endpoints.verify_credentials, (), "GET", "account/verify_credentials", {}, {}),
    (endpoints.update_settings, (), "POST", "account/settings", {}, {}),
    (endpoints.update_profile, (), "POST", "account/update_profile", {}, {}),
    (endpoints.limits, (), "GET", "application/rate_limit_status", {}, {}),
]


@pytest.mark.parametrize("func, args, method, path, expected, payload", CASES, ids=[c[0].__name__ for c in CASES])
def test_endpoint_wiring(client, recorder, func, args, method, path, expected, payload):
    recorder.reply(200, payload)

    func(client, *args)

    request = recorder.last
    assert request.method == method
    assert request.url.path == f"/1.1/{path}.json"
    assert _sent_params(request) == expected


def test_no_arg_endpoints(client, recorder):
    recorder.reply(200, {"max_media_per_upload": 1, "photo_sizes": {"thumb": {"w": 150, "h": 150, "resize": "crop"}}})
    config = endpoints.configuration(client)
    assert isinstance(config, Configuration)
    assert config.photo_sizes["thumb"].w == 150

    recorder.reply(200, {"privacy": "Privacy text"})
    assert endpoints.privacy_policy(client) == "Privacy text"
    assert recorder.last.url.path == "/1.1/help/privacy.json"

    recorder.reply(200, {"tos": "Terms"})
    assert endpoints.tos(client) == "Terms"

    recorder.reply(200, {"screen_name": "jack", "time_zone": {"name": "Pacific", "utc_offset": -28800}})
    settings = endpoints.account_settings(client)
    assert isinstance(settings, AccountSettings)
    assert settings.time_zone.utc_offset == -28800


def test_results_are_typed(client, recorder):
    recorder.reply(200, [{"id": 1, "text": "a", "user": {"screen_name": "jack"}}])
    tweets = endpoints.home_timeline(client)
    assert isinstance(tweets[0], Tweet)
    assert tweets[0].user.screen_name == "jack"

    recorder.reply(200, [{"id": 2, "text": "dm", "sender_screen_name": "bob"}])
    messages = endpoints.dm_list(client)
    assert isinstance(messages[0], Message)

    recorder.reply(200, [{"id": 3, "screen_name": "py"}])
    users = endpoints.search_users(client, "py")
    assert isinstance(users[0], User)

    recorder.reply(200, {"resources": {"help": {"/help/tos": {"limit": 15, "remaining": 14, "reset": 0}}}})
    assert isinstance(endpoints.limits(client), Limits)


def test_caller_params_are_merged_not_mutated(client, recorder):
    recorder.reply(200, [])
    opts = Optionals().add("count", 5).add("screen_name", "someone_else")

    endpoints.user_timeline(client, "jack", opts)

    assert _sent_params(recorder.last) == {"count": "5", "screen_name": "jack"}
    assert opts.get("screen_name") == "someone_else"


def test_missing_opts_never_share_state(client, recorder):
    recorder.reply(200, {})
    endpoints.update_status(client, "first")
    recorder.reply(200, [])
    endpoints.home_timeline(client)

    assert _sent_params(recorder.last) == {}


@pytest.mark.parametrize("enable, device", [(True, "sms"), (False, "none")])
def test_enable_sms(client, recorder, enable, device):
    recorder.reply(200, {})

    assert endpoints.enable_sms(client, enable) is None
    assert recorder.last.url.path == "/1.1/account/update_delivery_device.json"
    assert _sent_params(recorder.last) == {"device": device}


def test_update_profile_background_image(client, recorder):
    recorder.reply(200, {"screen_name": "jack"})
    endpoints.update_profile_background_image(client, b"\x00img")
    params = _sent_params(recorder.last)
    assert base64.b64decode(params["image"]) == b"\x00img"
    assert params["use"] == "true"

    recorder.reply(200, {"screen_name": "jack"})
    endpoints.update_profile_background_image(client, b"")
    assert _sent_params(recorder.last) == {"use": "false"}


def test_update_status_with_media(client, recorder):
    recorder.reply(200, {"id": 9, "text": "look"})

    tweet = endpoints.update_status_with_media(client, "look", TweetMedia(filename="a.gif", data=b"GIF89a"))

    assert tweet.id == 9
    assert recorder.last.url.path == "/1.1/statuses/update_with_media.json"
    assert b'name="media[]"; filename="a.gif"' in recorder.last.content


@pytest.mark.parametrize(
    "call",
    [
        lambda c: endpoints.update_status(c, "  "),
        lambda c: endpoints.user_timeline(c, ""),
        lambda c: endpoints.dm_send(c, "jack", ""),
        lambda c: endpoints.search_users(c, ""),
        lambda c: endpoints.get_status(c, 0),
        lambda c: endpoints.retweet(c, True),
        lambda c: endpoints.dm(c, -1),
        lambda c: endpoints.update_status_with_media(c, "", TweetMedia(filename="a.png", data=b"x")),
    ],
)
def test_required_fields_are_checked_before_network(client, recorder, call):
    with pytest.raises(ValueError):
        call(client)

    assert recorder.requests == []
