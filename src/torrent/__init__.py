from .metainfo import InvalidMetainfo, TorrentMeta

__all__ = ['TorrentMeta', 'InvalidMetainfo']
