import hashlib
import logging
from pathlib import Path

from bencodec import BencodeDict, BencodeError, decode, encode

logger = logging.getLogger(__name__)


class InvalidMetainfo(ValueError):
    """The file decodes as bencode but is not a usable torrent."""


def _text(raw: bytes) -> str:
    # names and URLs are not guaranteed to be UTF-8
    return raw.decode("utf-8", errors="replace")


class TorrentMeta:
    """
    Parsed .torrent metainfo.

    The info hash is the SHA-1 of the canonical re-encoding of the decoded
    ``info`` dictionary.
    """
    def __init__(self, path: Path):
        self.path = Path(path)

        # Load raw bytes
        raw = self.path.read_bytes()
        logger.debug("Read %d bytes from %s", len(raw), self.path)

        try:
            root = decode(raw)
        except BencodeError as exc:
            raise InvalidMetainfo(f"{self.path}: {exc}") from exc

        if not isinstance(root, BencodeDict):
            raise InvalidMetainfo("Invalid torrent: root must be a dictionary")
        self.data = root

        try:
            self._load(root)
        except BencodeError as exc:
            raise InvalidMetainfo(f"{self.path}: {exc}") from exc

        logger.debug("Loaded %r, info hash %s", self, self.info_hash_hex)

    def _load(self, root: BencodeDict):
        # ------------------ INFO ------------------
        info_b = root.get(b"info")
        self.info = info_b.as_dict()
        self.info_bytes = encode(info_b)
        self.info_hash = hashlib.sha1(self.info_bytes).digest()

        # ------------------ NAME ------------------
        self.name_bytes = info_b.get(b"name").as_string()
        self.name = _text(self.name_bytes)

        # ------------------ ANNOUNCE URL ------------------
        self.announce = None
        if b"announce" in root:
            self.announce = _text(root.get(b"announce").as_string())

        # ------------------ ANNOUNCE-LIST ------------------
        self.announce_list = None
        if b"announce-list" in root:
            tiers = []
            for tier in root.get(b"announce-list").as_list():
                urls = [_text(u.as_string()) for u in tier.as_list()]
                if urls:
                    tiers.append(urls)
            if tiers:
                self.announce_list = tiers

        # ------------------ PIECE LENGTH ------------------
        self.piece_length = info_b.get(b"piece length").as_integer()
        if self.piece_length <= 0:
            raise InvalidMetainfo(f"Invalid piece length {self.piece_length}")

        # ------------------ PIECES ------------------
        raw_pieces = info_b.get(b"pieces").as_string()
        if len(raw_pieces) % 20:
            raise InvalidMetainfo("Pieces string length is not a multiple of 20")
        self.pieces = [raw_pieces[i:i+20] for i in range(0, len(raw_pieces), 20)]

        # ------------------ FILES ------------------
        self.is_multi = b"files" in info_b
        if self.is_multi:
            self.files = []
            for f_entry in info_b.get(b"files").as_list():
                length = f_entry.get(b"length").as_integer()
                parts = [_text(p.as_string()) for p in f_entry.get(b"path").as_list()]
                self.files.append({"length": length, "path": "/".join(parts)})
        else:
            length = info_b.get(b"length").as_integer()
            self.files = [{"length": length, "path": self.name}]

        self.total_length = sum(f["length"] for f in self.files)
        self.is_single = not self.is_multi
        self.num_pieces = len(self.pieces)
        self.last_piece_length = (self.total_length % self.piece_length) or self.piece_length

        for f in self.files:
            f["abs_path"] = f"{self.name}/{f['path']}" if self.is_multi else self.name

    @property
    def info_hash_hex(self) -> str:
        return self.info_hash.hex()

    def __repr__(self):
        return (
            f"TorrentMeta(name={self.name!r}, files={len(self.files)}, pieces={self.num_pieces}, "
            f"multi={self.is_multi}, announce={self.announce!r})"
        )
