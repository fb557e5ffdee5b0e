import logging
import os
import sys
from pathlib import Path

sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from bencodec import dump
from torrent.metainfo import TorrentMeta

logger = logging.getLogger(__name__)


def main(argv):
    if len(argv) < 2:
        print(f"usage: {argv[0]} FILE.torrent [--dump]")
        return 2

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    torrent_path = Path(argv[1])
    meta = TorrentMeta(torrent_path)
    logger.info("Loaded %s", torrent_path)

    print("name:", meta.name)
    print("announce:", meta.announce)
    print("announce_list:", meta.announce_list)
    print("Computed info_hash:", meta.info_hash_hex)

    if "--dump" in argv[2:]:
        print(dump(meta.data))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
