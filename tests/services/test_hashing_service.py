import base64
import hashlib
import os
import zlib
import pytest
from models.hash_algorithm import HashAlgorithm, OutputEncoding
from services.hashing_service import HashingService, encode_digest
from utils.errors import EncodingMismatchError, FileAccessError

SHA3_256_EMPTY = "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a"


@pytest.fixture
def service():
    return HashingService()


def test_sha3_256_hex_hello_world(service, make_file):
    path = make_file("hello.txt", b"hello world")
    result = service.hash_file(path, HashAlgorithm.SHA3_256, OutputEncoding.HEX)
    assert str(result) == "644bcc7e564373040999aac89e7622f3ca71fba1d972fd94a31c3bfbf24e3938"
    assert len(result.value) == 64


def test_md5_hex(service, test_file):
    assert str(service.hash_file(test_file, HashAlgorithm.MD5, OutputEncoding.HEX)) == "098f6bcd4621d373cade4e832627b4f6"


def test_crc32_u32(service, test_file):
    assert str(service.hash_file(test_file, HashAlgorithm.CRC32, OutputEncoding.U32)) == "3632233996"


def test_sha3_256_base64(service, test_file):
    result = service.hash_file(test_file, HashAlgorithm.SHA3_256, OutputEncoding.BASE64)
    assert str(result) == "NvAoWAuwLMgnKpoCD0IA40bidq5mTkXugHRVdOL1q4A="


def test_empty_file_sha3_256(service, make_file):
    path = make_file("empty.bin", b"")
    assert str(service.hash_file(path, HashAlgorithm.SHA3_256, OutputEncoding.HEX)) == SHA3_256_EMPTY


@pytest.mark.parametrize("algorithm,expected", [
    (HashAlgorithm.SHA1, "a94a8fe5ccb19ba61c4c0873d391e987982fbbd3"),
    (HashAlgorithm.SHA2_256, "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"),
    (HashAlgorithm.SHA2_224, hashlib.sha224(b"test").hexdigest()),
    (HashAlgorithm.SHA2_512, hashlib.sha512(b"test").hexdigest()),
    (HashAlgorithm.SHA3_512, hashlib.sha3_512(b"test").hexdigest()),
    (HashAlgorithm.BLAKE2B_512, hashlib.blake2b(b"test").hexdigest()),
    (HashAlgorithm.BLAKE2S_256, hashlib.blake2s(b"test").hexdigest()),
])
def test_hex_matches_reference(service, test_file, algorithm, expected):
    assert str(service.hash_file(test_file, algorithm, OutputEncoding.HEX)) == expected


def test_same_content_hashes_identically(service, make_file):
    first = make_file("a.bin", b"duplicate content")
    second = make_file("b.bin", b"duplicate content")
    results = {
        service.hash_file(path, HashAlgorithm.SHA2_256, OutputEncoding.BASE32) for path in (first, second, first)
    }
    assert len(results) == 1


def test_encodings_decode_back_to_raw_digest(service, test_file):
    raw = hashlib.sha3_256(b"test").digest()
    hex_value = service.hash_file(test_file, HashAlgorithm.SHA3_256, OutputEncoding.HEX).value
    b64_value = service.hash_file(test_file, HashAlgorithm.SHA3_256, OutputEncoding.BASE64).value
    b32_value = service.hash_file(test_file, HashAlgorithm.SHA3_256, OutputEncoding.BASE32).value
    assert bytes.fromhex(hex_value) == raw
    assert base64.b64decode(b64_value) == raw
    assert base64.b32decode(b32_value) == raw
    assert hex_value == hex_value.lower()


@pytest.mark.parametrize("size", [15, 16, 17, 48, 49])
def test_chunk_boundaries_match_single_shot(make_file, size):
    content = bytes(i % 251 for i in range(size))
    path = make_file(f"boundary_{size}.bin", content)
    service = HashingService(chunk_size=16)
    result = service.hash_file(path, HashAlgorithm.SHA2_256, OutputEncoding.HEX)
    assert str(result) == hashlib.sha256(content).hexdigest()


def test_threshold_selects_strategy(make_file, mocker):
    service = HashingService(chunk_size=16)
    whole = mocker.spy(service, "_digest_whole")
    streaming = mocker.spy(service, "_digest_streaming")

    service.digest_file(make_file("at.bin", b"x" * 16), HashAlgorithm.MD5)
    assert whole.call_count == 1
    assert streaming.call_count == 0

    service.digest_file(make_file("over.bin", b"x" * 17), HashAlgorithm.MD5)
    assert whole.call_count == 1
    assert streaming.call_count == 1


def test_large_repeated_file_same_under_both_strategies(make_file):
    content = b"\xab" * 40_000
    path = make_file("large.bin", content)
    streamed = HashingService().digest_file(path, HashAlgorithm.SHA3_256)
    whole = HashingService(chunk_size=64 * 1024).digest_file(path, HashAlgorithm.SHA3_256)
    small_chunks = HashingService(chunk_size=3 * 1024).digest_file(path, HashAlgorithm.SHA3_256)
    assert streamed == whole == small_chunks == hashlib.sha3_256(content).digest()


def test_final_partial_chunk_does_not_reuse_stale_bytes(make_file):
    content = os.urandom(3 * 1024 + 100)
    path = make_file("partial.bin", content)
    service = HashingService(chunk_size=1024)
    assert service.digest_file(path, HashAlgorithm.CRC32) == (zlib.crc32(content) & 0xFFFFFFFF).to_bytes(4, "big")
    assert service.digest_file(path, HashAlgorithm.SHA1) == hashlib.sha1(content).digest()


def test_missing_file_raises_file_access_error(service, tmp_path):
    missing = str(tmp_path / "nope.txt")
    with pytest.raises(FileAccessError) as exc_info:
        service.hash_file(missing, HashAlgorithm.MD5, OutputEncoding.HEX)
    assert exc_info.value.path == missing
    assert isinstance(exc_info.value.__cause__, OSError)


def test_directory_raises_file_access_error(service, tmp_path):
    with pytest.raises(FileAccessError):
        service.hash_file(str(tmp_path), HashAlgorithm.MD5, OutputEncoding.HEX)


def test_chunk_size_must_be_positive():
    with pytest.raises(ValueError):
        HashingService(chunk_size=0)


def test_u32_requires_four_bytes():
    with pytest.raises(EncodingMismatchError, match="4 bytes"):
        encode_digest(b"\x00" * 16, OutputEncoding.U32)


@pytest.mark.parametrize("raw,expected", [
    (b"\x00\x00\x00\x01", "0000000001"),
    (b"\x00\x00\x00\x00", "0000000000"),
    (b"\xff\xff\xff\xff", "4294967295"),
])
def test_u32_is_zero_padded_big_endian(raw, expected):
    assert encode_digest(raw, OutputEncoding.U32).value == expected


def test_unresolved_encoding_is_rejected():
    with pytest.raises(EncodingMismatchError, match="not resolved"):
        encode_digest(b"\x01\x02", None)


def test_whirlpool_streaming_matches_whole_file(make_file):
    content = bytes(i % 251 for i in range(5000))
    path = make_file("whirlpool.bin", content)
    streamed = HashingService(chunk_size=1024).hash_file(path, HashAlgorithm.WHIRLPOOL, OutputEncoding.HEX)
    whole = HashingService().hash_file(path, HashAlgorithm.WHIRLPOOL, OutputEncoding.HEX)
    assert streamed == whole
    assert len(streamed.value) == 128
