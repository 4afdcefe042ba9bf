import os

from dataclasses import dataclass, field
from pathlib import Path

from dirshare.constants import (
    DEFAULT_APP_ID,
    DEFAULT_DOWNLOAD_DIR,
    DEFAULT_PASS_PHRASE_COMPONENT_LENGTH,
    DEFAULT_RENDEZVOUS_URL,
    DEFAULT_TRANSIT_RELAY_ADDRESS,
    MAX_PASS_PHRASE_COMPONENT_LENGTH,
    MIN_PASS_PHRASE_COMPONENT_LENGTH,
)

def user_downloads_folder() -> str:
    return str(DEFAULT_DOWNLOAD_DIR)

@dataclass
class ClientConfig:
    download_path: str = field(default_factory=user_downloads_folder)
    overwrite_existing: bool = False
    notifications: bool = True
    no_extract_directory: bool = False # Save received directories as the zip archive
    verify: bool = False
    pass_phrase_component_length: int = DEFAULT_PASS_PHRASE_COMPONENT_LENGTH
    app_id: str = DEFAULT_APP_ID
    rendezvous_url: str = DEFAULT_RENDEZVOUS_URL
    transit_relay_address: str = DEFAULT_TRANSIT_RELAY_ADDRESS

    def set_download_path(self, path: str):
        path = os.path.normpath(path)
        p = Path(path)

        if not p.exists():
            raise FileNotFoundError(f"\"{path}\" does not exist")
        elif not p.is_dir():
            raise NotADirectoryError(f"\"{path}\" is not a directory")

        self.download_path = path

    def set_pass_phrase_component_length(self, length: int):
        if not (MIN_PASS_PHRASE_COMPONENT_LENGTH <= length <= MAX_PASS_PHRASE_COMPONENT_LENGTH):
            raise ValueError(
                f"Passphrase length must be between {MIN_PASS_PHRASE_COMPONENT_LENGTH} "
                f"and {MAX_PASS_PHRASE_COMPONENT_LENGTH}."
            )

        self.pass_phrase_component_length = length
