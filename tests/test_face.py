import random

from utils.face_match import face_hash, mock_confidence, pick_candidate


def test_face_hash_matches_string_hashcode():
    assert face_hash("") == 0
    assert face_hash("a") == 97
    assert face_hash("hello") == 99162322
    # wraps into the negative int32 range
    assert face_hash("polygenelubricants") == -2147483648


def test_face_hash_uses_utf16_code_units():
    # U+1F600 is a surrogate pair: 0xD83D 0xDE00
    assert face_hash("\U0001F600") == 0xD83D * 31 + 0xDE00


def test_pick_candidate_only_considers_first_five():
    candidates = [{"employeeId": f"EMP{i}"} for i in range(8)]
    chosen = pick_candidate("hello", candidates)
    assert chosen == candidates[99162322 % 5]


def test_pick_candidate_empty():
    assert pick_candidate("anything", []) is None


def test_mock_confidence_range():
    rng = random.Random(7)
    values = [mock_confidence(rng) for _ in range(200)]
    assert all(0.70 <= v < 1.00 for v in values)


def test_recognize_without_users(client):
    response = client.post("/api/face/recognize", json={"faceData": "abc"})
    assert response.status_code == 200
    assert response.get_json()["success"] is False


def test_recognize_is_deterministic(client, make_user):
    for i in range(1, 4):
        make_user(f"EMP00{i}", f"User {i}")

    first = client.post("/api/face/recognize", json={"faceData": "test_face_data_1"}).get_json()
    second = client.post("/api/face/recognize", json={"faceData": "test_face_data_1"}).get_json()

    assert first["success"] is True
    assert first["user"] == second["user"]
    expected = f"EMP00{abs(face_hash('test_face_data_1')) % 3 + 1}"
    assert first["user"]["employeeId"] == expected
    assert 0.70 <= first["confidence"] < 1.00


def test_recognize_requires_face_data(client):
    response = client.post("/api/face/recognize", json={})
    assert response.status_code == 400


def test_recognize_rejects_non_object_body(client):
    response = client.post("/api/face/recognize", json=["abc"])
    assert response.status_code == 400
