"""Catálogo de endpoints tipados.

Cada función es una llamada fina sobre `ApiClient.call`: aporta verbo, ruta,
los campos obligatorios y la forma del resultado. No hay herencia ni despacho
dinámico; agregar un endpoint es agregar una función.

Reglas:
- `opts` es opcional; si falta se usa un `Optionals` nuevo (nunca uno compartido).
- Los campos inyectados usan `Optionals.set` sobre una copia: el contenedor
  del llamador no se modifica y no quedan valores duplicados.
"""

from __future__ import annotations

import base64

from core.domain.models import (
    AccountSettings,
    Configuration,
    Limits,
    Message,
    PrivacyPolicy,
    TermsOfService,
    Tweet,
    TweetMedia,
    User,
)
from core.domain.params import Optionals, Scalar
from core.services.dispatcher import ApiClient


def _with(opts: Optionals | None, **fields: Scalar) -> Optionals:
    out = opts.copy() if opts is not None else Optionals()
    for name, value in fields.items():
        out.set(name, value)
    return out


def _require_text(name: str, value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} is required")
    return value


def _require_id(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"id must be a positive integer, got {value!r}")
    return value


# Timelines y statuses


def mentions(client: ApiClient, opts: Optionals | None = None) -> list[Tweet]:
    """Últimos tweets que mencionan al usuario autenticado (`count` hasta 800)."""

    return client.call("GET", "statuses/mentions_timeline", _with(opts), list[Tweet])


def user_timeline(client: ApiClient, screen_name: str, opts: Optionals | None = None) -> list[Tweet]:
    _require_text("screen_name", screen_name)
    return client.call("GET", "statuses/user_timeline", _with(opts, screen_name=screen_name), list[Tweet])


def home_timeline(client: ApiClient, opts: Optionals | None = None) -> list[Tweet]:
    return client.call("GET", "statuses/home_timeline", _with(opts), list[Tweet])


def retweets_of_me(client: ApiClient, opts: Optionals | None = None) -> list[Tweet]:
    return client.call("GET", "statuses/retweets_of_me", _with(opts), list[Tweet])


def update_status(client: ApiClient, status: str, opts: Optionals | None = None) -> Tweet:
    _require_text("status", status)
    return client.call("POST", "statuses/update", _with(opts, status=status), Tweet)


def retweets(client: ApiClient, tweet_id: int, opts: Optionals | None = None) -> list[Tweet]:
    """Hasta 100 retweets del tweet `tweet_id`."""

    _require_id(tweet_id)
    return client.call("GET", f"statuses/retweets/{tweet_id}", _with(opts), list[Tweet])


def get_status(client: ApiClient, tweet_id: int, opts: Optionals | None = None) -> Tweet:
    _require_id(tweet_id)
    return client.call("GET", "statuses/show", _with(opts, id=tweet_id), Tweet)


def destroy_status(client: ApiClient, tweet_id: int, opts: Optionals | None = None) -> Tweet:
    """Borra un tweet propio y devuelve el tweet borrado."""

    _require_id(tweet_id)
    return client.call("POST", f"statuses/destroy/{tweet_id}", _with(opts, id=tweet_id), Tweet)


def retweet(client: ApiClient, tweet_id: int, opts: Optionals | None = None) -> Tweet:
    _require_id(tweet_id)
    return client.call("POST", f"statuses/retweet/{tweet_id}", _with(opts, id=tweet_id), Tweet)


def update_status_with_media(
    client: ApiClient,
    status: str,
    media: TweetMedia,
    opts: Optionals | None = None,
) -> Tweet:
    """Publica un tweet con una imagen adjunta (multipart)."""

    _require_text("status", status)
    return client.call_multipart(status, media, _with(opts), Tweet)


# Help


def configuration(client: ApiClient) -> Configuration:
    return client.call("GET", "help/configuration", None, Configuration)


def privacy_policy(client: ApiClient) -> str:
    return client.call("GET", "help/privacy", None, PrivacyPolicy).privacy


def tos(client: ApiClient) -> str:
    return client.call("GET", "help/tos", None, TermsOfService).tos


def limits(client: ApiClient, opts: Optionals | None = None) -> Limits:
    """Rate limits actuales; `resources` acepta familias separadas por coma."""

    return client.call("GET", "application/rate_limit_status", _with(opts), Limits)


# Mensajes directos


def dm_list(client: ApiClient, opts: Optionals | None = None) -> list[Message]:
    return client.call("GET", "direct_messages", _with(opts), list[Message])


def dm_sent(client: ApiClient, opts: Optionals | None = None) -> list[Message]:
    return client.call("GET", "direct_messages/sent", _with(opts), list[Message])


def dm(client: ApiClient, message_id: int, opts: Optionals | None = None) -> Message:
    _require_id(message_id)
    return client.call("GET", "direct_messages/show", _with(opts, id=message_id), Message)


def dm_destroy(client: ApiClient, message_id: int, opts: Optionals | None = None) -> Message:
    """Borra un DM recibido por el usuario autenticado."""

    _require_id(message_id)
    return client.call("POST", "direct_messages/destroy", _with(opts, id=message_id), Message)


def dm_send(client: ApiClient, screen_name: str, text: str, opts: Optionals | None = None) -> Message:
    _require_text("screen_name", screen_name)
    _require_text("text", text)
    return client.call("POST", "direct_messages/new", _with(opts, screen_name=screen_name, text=text), Message)


# Usuarios


def search_users(client: ApiClient, q: str, opts: Optionals | None = None) -> list[User]:
    """Búsqueda por relevancia de cuentas públicas (no admite match exacto)."""

    _require_text("q", q)
    return client.call("GET", "users/search", _with(opts, q=q), list[User])


# Cuenta


def account_settings(client: ApiClient) -> AccountSettings:
    return client.call("GET", "account/settings", None, AccountSettings)


def verify_credentials(client: ApiClient, opts: Optionals | None = None) -> User:
    """Devuelve el usuario si las credenciales del transporte son válidas."""

    return client.call("GET", "account/verify_credentials", _with(opts), User)


def update_settings(client: ApiClient, opts: Optionals | None = None) -> AccountSettings:
    return client.call("POST", "account/settings", _with(opts), AccountSettings)


def enable_sms(client: ApiClient, enable: bool) -> None:
    client.call("POST", "account/update_delivery_device", _with(None, device="sms" if enable else "none"))


def update_profile(client: ApiClient, opts: Optionals | None = None) -> User:
    """Actualiza solo los campos presentes en `opts` (name, url, location, description)."""

    return client.call("POST", "account/update_profile", _with(opts), User)


def update_profile_background_image(client: ApiClient, image: bytes, opts: Optionals | None = None) -> User:
    """Cambia la imagen de fondo. Con `image` vacío se desactiva la actual."""

    if image:
        params = _with(opts, image=base64.b64encode(image).decode("ascii"), use=True)
    else:
        params = _with(opts, use=False)
    return client.call("POST", "account/update_profile_background_image", params, User)
