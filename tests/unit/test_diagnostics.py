import sys
import tempfile
import unittest
import zipfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "protocol"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from ripdraw_core.config import load_config
from ripdraw_core.diagnostics import DiagnosticsExporter, build_doctor_payload, redact


class DiagnosticsTests(unittest.TestCase):
    def test_doctor_payload_lists_libraries(self):
        cfg = load_config(Path("/tmp/nonexistent-ripdraw-config.json"))
        payload = build_doctor_payload(cfg)
        self.assertIn("pillow", payload["libraries"])
        self.assertIn("numpy", payload["libraries"])
        self.assertEqual(payload["config"]["canvas"]["width"], 640)

    def test_redact_secret_keys(self):
        self.assertEqual(redact({"api_key": "x", "n": [{"token": 1}]}), {"api_key": "***REDACTED***", "n": [{"token": "***REDACTED***"}]})

    def test_bundle_exports_zip(self):
        cfg = load_config(Path("/tmp/nonexistent-ripdraw-config.json"))
        doctor = build_doctor_payload(cfg)
        exporter = DiagnosticsExporter()

        with tempfile.TemporaryDirectory() as tmp:
            bundle = exporter.bundle(cfg=cfg, doctor_payload=doctor, output_dir=Path(tmp))
            self.assertTrue(bundle.exists())

            with zipfile.ZipFile(bundle, "r") as zf:
                names = set(zf.namelist())
                self.assertIn("manifest.json", names)
                self.assertIn("doctor.json", names)
                self.assertIn("config.redacted.json", names)
                self.assertIn("render_events.json", names)


if __name__ == "__main__":
    unittest.main()
