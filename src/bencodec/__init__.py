"""
Bencode package for encoding and decoding BitTorrent data.
"""
from .decoder import BencodeDecoder, decode
from .dump import dump
from .encoder import encode
from .errors import (
    BencodeDecodeError,
    BencodeEncodeError,
    BencodeError,
    IntegerOverflow,
    KeyNotFound,
    MalformedInteger,
    MalformedLength,
    NestingTooDeep,
    NonStringKey,
    TrailingData,
    TypeMismatch,
    UnexpectedEnd,
    UnknownType,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, wrap

__all__ = [
    'decode', 'encode', 'dump', 'wrap', 'BencodeDecoder',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeError', 'BencodeDecodeError', 'BencodeEncodeError',
    'UnexpectedEnd', 'MalformedLength', 'MalformedInteger', 'IntegerOverflow',
    'UnknownType', 'NonStringKey', 'NestingTooDeep', 'TrailingData', 'TypeMismatch', 'KeyNotFound',
]
