from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Session credentials copied from a logged-in browser.
    buffer_cookies: str = ""
    buffer_organization_id: str = ""
    buffer_channel_id: str = ""
    buffer_user_id: str = ""

    intake_dir: str = "uploads"
    done_dir: str = "done"
    captions_path: str = "captions.json"
    default_caption: str = "Check out this video!"

    # Seconds. The object PUT carries the whole file so it gets its own budget.
    http_timeout: float = 60.0
    upload_timeout: float = 600.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
