from __future__ import annotations

from dataclasses import dataclass, field

from reelpost.errors import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    session_cookie: str
    organization_id: str
    channel_id: str
    user_id: str = ""

    @classmethod
    def from_settings(cls, config) -> "Credentials":
        """Validate and freeze the credential fields of ``config``.

        Raises:
            ConfigurationError: if the cookie, organization id or channel id
                is empty. The message names every missing variable.
        """
        required = {
            "BUFFER_COOKIES": config.buffer_cookies,
            "BUFFER_ORGANIZATION_ID": config.buffer_organization_id,
            "BUFFER_CHANNEL_ID": config.buffer_channel_id,
        }
        missing = [name for name, value in required.items() if not value.strip()]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )
        return cls(
            session_cookie=config.buffer_cookies.strip(),
            organization_id=config.buffer_organization_id.strip(),
            channel_id=config.buffer_channel_id.strip(),
            user_id=config.buffer_user_id.strip(),
        )


@dataclass
class UploadTarget:
    url: str
    key: str
    bucket: str = ""


@dataclass
class MediaDetails:
    location: str
    file_size: int = 0
    file_extension: str = ""
    duration: float = 0.0
    duration_millis: int = 0
    width: int = 0
    height: int = 0
    format: str | None = None
    video_format: str | None = None
    frame_rate: float | None = None
    video_bitrate: int | None = None
    audio_codec: str | None = None
    audio_bitrate: int | None = None
    rotation: int | None = None
    required_transcoding: bool | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "MediaDetails":
        return cls(
            location=data.get("location") or "",
            file_size=data.get("file_size") or 0,
            file_extension=data.get("file_extension") or "",
            duration=data.get("duration") or 0.0,
            duration_millis=data.get("duration_millis") or 0,
            width=data.get("width") or 0,
            height=data.get("height") or 0,
            format=data.get("format"),
            video_format=data.get("video_format"),
            frame_rate=data.get("frame_rate"),
            video_bitrate=data.get("video_bitrate"),
            audio_codec=data.get("audio_codec"),
            audio_bitrate=data.get("audio_bitrate"),
            rotation=data.get("rotation"),
            required_transcoding=data.get("required_transcoding"),
        )


@dataclass
class MediaRecord:
    upload_id: str
    title: str
    details: MediaDetails
    location: str = ""
    type: str = ""
    transcode_video: bool = False
    raw: dict = field(default_factory=dict)


@dataclass
class PostResult:
    success: bool
    message: str = ""
    update_ids: list[str] = field(default_factory=list)
    raw: dict = field(default_factory=dict)
