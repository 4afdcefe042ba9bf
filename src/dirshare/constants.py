from pathlib import Path

FILE_CHUNK_SIZE = 256 * 1024 # 256 KiB

DEFAULT_DOWNLOAD_DIR = Path.home() / "Downloads"
DEFAULT_PASS_PHRASE_COMPONENT_LENGTH = 2
MIN_PASS_PHRASE_COMPONENT_LENGTH = 2
MAX_PASS_PHRASE_COMPONENT_LENGTH = 9

DEFAULT_APP_ID = "lothar.com/wormhole/text-or-file-xfer"
DEFAULT_RENDEZVOUS_URL = "ws://relay.magic-wormhole.io:4000/v1"
DEFAULT_TRANSIT_RELAY_ADDRESS = "transit.magic-wormhole.io:4001"
