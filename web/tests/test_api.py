"""Boundary tests for the translation HTTP API."""

import unittest

try:
    from fastapi.testclient import TestClient
except ImportError:  # pragma: no cover - optional dependency
    TestClient = None

try:
    from web import app as web_app
    from web.config import Settings
except ImportError:  # pragma: no cover - optional dependency
    web_app = None


@unittest.skipIf(TestClient is None or web_app is None, "FastAPI not available")
class WebApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(web_app.create_app(Settings()))

    def test_health(self) -> None:
        response = self.client.get("/api/v1/health")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["status"], "healthy")
        self.assertIn("timestamp", payload)

    def test_translate_transfer_intent(self) -> None:
        response = self.client.post(
            "/api/v1/translate",
            json={
                "input": {"type": "intent", "action": "transfer", "params": {"amount": "1000000000"}},
                "context": {"senderAddress": "inj1abc", "recipientAddress": "inj1xyz"},
            },
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertTrue(payload["success"])
        message = payload["translation"]["messages"][0]
        self.assertEqual(message["@type"], "/cosmos.bank.v1beta1.MsgSend")
        self.assertEqual(message["amount"], [{"denom": "inj", "amount": "1000000000"}])
        self.assertEqual(payload["metadata"]["match_type"], "DIRECT")
        self.assertEqual(payload["metadata"]["source_signature"], "transfer(address,uint256)")

    def test_translate_error_statuses(self) -> None:
        cases = [
            ({}, 400, "MISSING_INPUT"),
            ({"input": {"type": "calldata", "data": "0x12"}}, 400, "MALFORMED_INPUT"),
            (
                {"input": {"type": "calldata", "data": "0xa9059cbb" + "00" * 32}},
                400,
                "DECODE_FAILED",
            ),
            (
                {
                    "input": {
                        "type": "intent",
                        "action": "transfer",
                        "params": {"amount": "1"},
                        "data": "0xa9059cbb",
                    }
                },
                400,
                "MALFORMED_INPUT",
            ),
            ({"input": {"type": "intent", "action": "mint"}}, 400, "UNKNOWN_INTENT"),
            (
                {"input": {"type": "intent", "action": "stake", "params": {"amount": "1"}}},
                400,
                "MISSING_REQUIRED_FIELD",
            ),
            ({"input": {"type": "calldata", "data": "0xdeadbeef"}}, 422, "UNRESOLVED_SELECTOR"),
            (
                {"input": {"type": "calldata", "data": "0xe8e33700" + "00" * 256}},
                422,
                "UNSUPPORTED_PATTERN",
            ),
        ]
        for body, status_code, code in cases:
            with self.subTest(code=code):
                response = self.client.post("/api/v1/translate", json=body)
                self.assertEqual(response.status_code, status_code)
                payload = response.json()
                self.assertFalse(payload["success"])
                self.assertEqual(payload["error"]["code"], code)

    def test_placeholders_follow_settings(self) -> None:
        client = TestClient(web_app.create_app(Settings(allow_placeholders=True)))
        response = client.post(
            "/api/v1/translate",
            json={"input": {"type": "intent", "action": "stake", "params": {"amount": "1"}}},
        )
        self.assertEqual(response.status_code, 200)
        message = response.json()["translation"]["messages"][0]
        self.assertEqual(message["validator_address"], "injvaloper1xxx")

    def test_compatibility(self) -> None:
        response = self.client.post(
            "/api/v1/compatibility",
            json={
                "patterns": [
                    "transfer(address,uint256)",
                    "approve(address,uint256)",
                    "flashLoan(address,uint256)",
                ]
            },
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["overall_compatibility"]["score"], 50)
        self.assertEqual(payload["overall_compatibility"]["status"], "PARTIALLY_COMPATIBLE")
        self.assertEqual(
            [item["status"] for item in payload["patterns"]],
            ["SUPPORTED", "PARTIAL", "UNSUPPORTED"],
        )

        empty = self.client.post("/api/v1/compatibility", json={})
        self.assertEqual(empty.status_code, 400)
        self.assertEqual(empty.json()["error"]["code"], "MISSING_INPUT")

    def test_migration_estimate_accepts_wire_alias(self) -> None:
        response = self.client.post(
            "/api/v1/migrate/estimate",
            json={
                "contractAbi": [
                    {"type": "function", "name": "transfer", "inputs": [{"type": "address"}, {"type": "uint256"}]},
                    {"type": "function", "name": "stake", "inputs": [{"type": "uint256"}]},
                ]
            },
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["summary"]["feasibility"], "STRAIGHTFORWARD")
        self.assertEqual(payload["analysis"]["functions"]["supported"], 2)
        self.assertEqual(len(payload["migration_plan"]), 3)
        self.assertEqual(payload["blockers"], [])

    def test_malformed_abi_entries_rejected(self) -> None:
        cases = [
            ("/api/v1/migrate/estimate", {"contractAbi": [{"type": "function", "name": "f", "inputs": [5]}]}),
            ("/api/v1/compatibility", {"contractAbi": [{"type": "function", "name": "f", "inputs": "abc"}]}),
        ]
        for path, body in cases:
            with self.subTest(path=path):
                response = self.client.post(path, json=body)
                self.assertEqual(response.status_code, 400)
                payload = response.json()
                self.assertFalse(payload["success"])
                self.assertEqual(payload["error"]["code"], "MALFORMED_INPUT")

    def test_oversized_body_rejected(self) -> None:
        client = TestClient(web_app.create_app(Settings(max_body_bytes=16)))
        response = client.post("/api/v1/compatibility", json={"patterns": ["transfer(address,uint256)"]})
        self.assertEqual(response.status_code, 413)
        self.assertEqual(response.json()["error"]["code"], "PAYLOAD_TOO_LARGE")

    def test_oversized_chunked_body_rejected(self) -> None:
        client = TestClient(web_app.create_app(Settings(max_body_bytes=16)))
        chunks = [b'{"patterns": [', b'"transfer(address,uint256)"', b"]}"]
        response = client.post(
            "/api/v1/compatibility",
            content=iter(chunks),
            headers={"content-type": "application/json"},
        )
        self.assertEqual(response.status_code, 413)
        self.assertEqual(response.json()["error"]["code"], "PAYLOAD_TOO_LARGE")

    def test_unknown_route(self) -> None:
        response = self.client.get("/api/v1/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"]["code"], "NOT_FOUND")


class SettingsTests(unittest.TestCase):
    @unittest.skipIf(web_app is None, "FastAPI not available")
    def test_from_env(self) -> None:
        settings = Settings.from_env(
            {"BRIDGE_LOG_LEVEL": "debug", "BRIDGE_MAX_BODY_BYTES": "2048", "BRIDGE_ALLOW_PLACEHOLDERS": "yes"}
        )
        self.assertEqual(settings, Settings(log_level="DEBUG", max_body_bytes=2048, allow_placeholders=True))
        self.assertEqual(Settings.from_env({}), Settings())

    @unittest.skipIf(web_app is None, "FastAPI not available")
    def test_invalid_body_limit(self) -> None:
        with self.assertRaises(ValueError):
            Settings.from_env({"BRIDGE_MAX_BODY_BYTES": "lots"})


if __name__ == "__main__":
    unittest.main()
