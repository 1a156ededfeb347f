"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación y documentación autocontenida (Field) sin acoplar el Core
  a librerías de I/O.
- Los resultados tipados de la API se pueblan con `TypeAdapter`, que tolera
  tanto modelos sueltos como listas (`list[Tweet]`).

Nota:
- Todos los campos de resultados tienen default: la API omite campos con
  frecuencia y el decoder puede descartar los que no encajan.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.errors import MediaIOError


class ApiErrorEntry(BaseModel):
    """Un error reportado por la API: `{message, code}`."""

    model_config = ConfigDict(extra="ignore")

    message: str = Field(..., description="Mensaje legible del error.")
    code: int = Field(..., description="Código numérico del error.")

    def __str__(self) -> str:
        return f"{self.message} ({self.code})"


class ApiErrorEnvelope(BaseModel):
    """Sobre `{errors: [...]}` que la API devuelve en respuestas fallidas."""

    model_config = ConfigDict(extra="ignore")

    errors: list[ApiErrorEntry] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.errors

    def fold(self) -> str:
        """Un mensaje por línea, en el orden original."""

        return "\n".join(str(e) for e in self.errors)


class HttpRequestDescriptor(BaseModel):
    """Request HTTP completo y transitorio (no se cachea ni reutiliza)."""

    method: str
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = b""

    @property
    def content_type(self) -> str | None:
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return None


class TransportResponse(BaseModel):
    """Lo que devuelve un transporte: status, headers y cuerpo ya drenado."""

    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = b""


class TweetMedia(BaseModel):
    """Adjunto binario para `statuses/update_with_media`.

    Se puede construir con los bytes en memoria (`data`) o con una ruta local
    (`path`) que se lee recién al armar el cuerpo multipart.
    """

    filename: str = Field(..., min_length=1)
    data: bytes | None = None
    path: Path | None = None

    @classmethod
    def from_path(cls, path: Path | str) -> "TweetMedia":
        p = Path(path)
        return cls(filename=p.name, path=p)

    def read_bytes(self) -> bytes:
        if self.data is not None:
            return self.data
        if self.path is None:
            raise MediaIOError(f"No byte source for media '{self.filename}'", filename=self.filename)
        try:
            return self.path.read_bytes()
        except OSError as exc:
            raise MediaIOError(f"Cannot read media '{self.path}': {exc}", filename=self.filename) from exc


class User(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int = 0
    id_str: str = ""
    screen_name: str = ""
    name: str = ""
    description: str | None = None
    location: str | None = None
    url: str | None = None
    protected: bool = False
    verified: bool = False
    followers_count: int = 0
    friends_count: int = 0
    statuses_count: int = 0
    created_at: str | None = None
    profile_image_url_https: str | None = None


class Tweet(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int = 0
    id_str: str = ""
    text: str = ""
    created_at: str | None = None
    source: str | None = None
    truncated: bool = False
    lang: str | None = None
    user: User | None = None
    in_reply_to_status_id: int | None = None
    in_reply_to_screen_name: str | None = None
    retweet_count: int = 0
    favorite_count: int = 0
    favorited: bool = False
    retweeted: bool = False
    entities: dict[str, Any] = Field(default_factory=dict)


class Message(BaseModel):
    """Mensaje directo."""

    model_config = ConfigDict(extra="ignore")

    id: int = 0
    id_str: str = ""
    text: str = ""
    created_at: str | None = None
    sender_screen_name: str = ""
    recipient_screen_name: str = ""
    sender: User | None = None
    recipient: User | None = None


class TimeZone(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    tzinfo_name: str = ""
    utc_offset: int = 0


class SleepTime(BaseModel):
    model_config = ConfigDict(extra="ignore")

    enabled: bool = False
    start_time: int | None = None
    end_time: int | None = None


class TrendLocation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    country: str = ""
    countryCode: str | None = None
    woeid: int = 0


class AccountSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    screen_name: str = ""
    language: str = ""
    protected: bool = False
    geo_enabled: bool = False
    always_use_https: bool = False
    discoverable_by_email: bool = False
    use_cookie_personalization: bool = False
    time_zone: TimeZone | None = None
    sleep_time: SleepTime | None = None
    trend_location: list[TrendLocation] = Field(default_factory=list)


class PhotoSize(BaseModel):
    model_config = ConfigDict(extra="ignore")

    w: int = 0
    h: int = 0
    resize: str = ""


class Configuration(BaseModel):
    """Configuración publicada por `help/configuration`."""

    model_config = ConfigDict(extra="ignore")

    characters_reserved_per_media: int = 0
    max_media_per_upload: int = 0
    photo_size_limit: int = 0
    short_url_length: int = 0
    short_url_length_https: int = 0
    non_username_paths: list[str] = Field(default_factory=list)
    photo_sizes: dict[str, PhotoSize] = Field(default_factory=dict)


class RateLimit(BaseModel):
    model_config = ConfigDict(extra="ignore")

    limit: int = 0
    remaining: int = 0
    reset: int = 0


class Limits(BaseModel):
    """Estado de rate limits por familia y ruta (`application/rate_limit_status`)."""

    model_config = ConfigDict(extra="ignore")

    rate_limit_context: dict[str, str] = Field(default_factory=dict)
    resources: dict[str, dict[str, RateLimit]] = Field(default_factory=dict)

    def for_path(self, path: str) -> RateLimit | None:
        for family in self.resources.values():
            if path in family:
                return family[path]
        return None


class PrivacyPolicy(BaseModel):
    model_config = ConfigDict(extra="ignore")

    privacy: str = ""


class TermsOfService(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tos: str = ""
