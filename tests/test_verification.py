import re
from datetime import datetime, timedelta

from storelease.models import Verification
from storelease.services import verification as verification_service


def sent_code(sms):
    return re.search(r"\[(\d{6})\]", sms.sent[-1][1]).group(1)


def test_send_and_check(client, sms):
    resp = client.post("/api/v1/verification/send", json={"phone": "010-1234-5678"})
    assert resp.status_code == 200
    assert resp.json()["message"] == "인증번호가 발송되었습니다."

    to, text = sms.sent[-1]
    assert to == "01012345678"
    assert text.startswith("[스마트창업] 인증번호는 [")

    resp = client.post(
        "/api/v1/verification/check",
        json={"phone": "01012345678", "code": sent_code(sms)},
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "인증에 성공했습니다."


def test_code_is_single_use(client, sms):
    client.post("/api/v1/verification/send", json={"phone": "01012345678"})
    payload = {"phone": "01012345678", "code": sent_code(sms)}
    assert client.post("/api/v1/verification/check", json=payload).status_code == 200

    resp = client.post("/api/v1/verification/check", json=payload)
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_code"


def test_wrong_code(client, sms):
    client.post("/api/v1/verification/send", json={"phone": "01012345678"})
    wrong = "000000" if sent_code(sms) != "000000" else "111111"
    resp = client.post(
        "/api/v1/verification/check", json={"phone": "01012345678", "code": wrong}
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_code"


def test_expired_code(client, db, sms):
    client.post("/api/v1/verification/send", json={"phone": "01012345678"})
    record = db.query(Verification).filter(Verification.target == "01012345678").one()
    record.expires_at = datetime.now() - timedelta(seconds=1)
    db.commit()

    resp = client.post(
        "/api/v1/verification/check",
        json={"phone": "01012345678", "code": sent_code(sms)},
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "expired_code"


def test_code_valid_for_three_minutes(db, sms):
    start = datetime(2024, 5, 1, 12, 0, 0)
    code = verification_service.send_code(db, sms, "01012345678", now=start)
    record = db.query(Verification).one()
    assert record.expires_at == start + timedelta(minutes=3)

    # exactly at expiry the code still works
    verification_service.check_code(
        db, "01012345678", code, now=start + timedelta(minutes=3)
    )
    assert db.query(Verification).count() == 0


def test_resend_replaces_code(client, db, sms):
    client.post("/api/v1/verification/send", json={"phone": "01012345678"})
    client.post("/api/v1/verification/send", json={"phone": "01012345678"})

    records = db.query(Verification).all()
    assert len(records) == 1
    assert records[0].code == sent_code(sms)


def test_invalid_phone(client):
    resp = client.post("/api/v1/verification/send", json={"phone": "12-34"})
    assert resp.status_code == 400
    assert "phone" in resp.json()["errors"]


def test_sms_failure_keeps_stored_code(client, db, sms):
    sms.fail = True
    resp = client.post("/api/v1/verification/send", json={"phone": "01012345678"})
    assert resp.status_code == 502
    assert resp.json()["code"] == "upstream_failure"
    assert db.query(Verification).count() == 1
