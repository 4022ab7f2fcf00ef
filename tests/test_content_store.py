import pytest

from cidnet.content_store import ContentStore


def test_generate_cid_is_deterministic_hex():
    cid = ContentStore.generate_cid("PLDG FTW!!!!")
    assert cid == ContentStore.generate_cid("PLDG FTW!!!!")
    assert len(cid) == 64
    assert cid == cid.lower()
    int(cid, 16)


def test_generate_cid_differs_for_different_payloads():
    assert ContentStore.generate_cid("hello") != ContentStore.generate_cid("hello!")


def test_str_and_bytes_share_a_cid():
    assert ContentStore.generate_cid("abc") == ContentStore.generate_cid(b"abc")
    # sha256("abc")
    assert ContentStore.generate_cid(b"abc") == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_generate_cid_rejects_other_types():
    with pytest.raises(TypeError):
        ContentStore.generate_cid(42)


def test_put_get_roundtrip():
    store = ContentStore()
    cid = store.put(b"\x00\x01binary")
    assert store.get(cid) == b"\x00\x01binary"
    assert store.has(cid)


def test_put_is_idempotent():
    store = ContentStore()
    first = store.put("same payload")
    second = store.put("same payload")
    assert first == second
    assert store.size() == 1
    assert store.cids() == [first]
    assert store.get(first) == "same payload"


def test_get_missing_returns_none():
    store = ContentStore()
    assert store.get(ContentStore.generate_cid("never stored")) is None
    assert not store.has("deadbeef")


def test_bytearray_payload_is_frozen_on_put():
    store = ContentStore()
    buf = bytearray(b"original")
    cid = store.put(buf)

    buf[:] = b"tampered"

    assert store.get(cid) == b"original"
    assert isinstance(store.get(cid), bytes)
    assert ContentStore.generate_cid(store.get(cid)) == cid


def test_first_stored_type_wins_for_equal_bytes():
    store = ContentStore()
    cid = store.put("abc")

    assert store.put(b"abc") == cid
    assert store.size() == 1
    assert store.get(cid) == "abc"
