import unittest
from dataclasses import asdict

from fastapi.testclient import TestClient

from api.app import create_app
from tests.helpers import pullup_pose, pushup_pose, without_keypoint


def pose_payload(pose) -> dict:
    return {"score": pose.score, "keypoints": [asdict(kp) for kp in pose.keypoints]}


class AnalysisApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app())

    def test_validate_good_pushup(self) -> None:
        resp = self.client.post(
            "/analysis/validate",
            json={"exercise": "pushups", "pose": pose_payload(pushup_pose(elbow_angle=90.0))},
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["is_valid_rep"])
        self.assertEqual([f["severity"] for f in body["feedback"]], ["info", "info", "info"])

    def test_validate_unreadable_pose(self) -> None:
        pose = without_keypoint(pushup_pose(), "left_ankle")
        resp = self.client.post("/analysis/validate", json={"exercise": "pushups", "pose": pose_payload(pose)})
        body = resp.json()
        self.assertFalse(body["is_valid_rep"])
        self.assertEqual(body["feedback"], [
            {"issue": "Cannot see all body parts clearly", "severity": "warning", "is_valid": False},
        ])

    def test_unknown_exercise_is_feedback_not_http_error(self) -> None:
        resp = self.client.post(
            "/analysis/validate",
            json={"exercise": "burpees", "pose": pose_payload(pushup_pose())},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["feedback"][0]["issue"], "Unknown exercise type")

    def test_exercise_name_is_normalized(self) -> None:
        resp = self.client.post(
            "/analysis/validate",
            json={"exercise": " PushUps ", "pose": pose_payload(pushup_pose(elbow_angle=90.0))},
        )
        self.assertTrue(resp.json()["is_valid_rep"])

    def test_out_of_range_confidence_is_rejected(self) -> None:
        payload = pose_payload(pushup_pose())
        payload["keypoints"][0]["score"] = 1.5
        resp = self.client.post("/analysis/validate", json={"exercise": "pushups", "pose": payload})
        self.assertEqual(resp.status_code, 422)

    def test_detect_rep(self) -> None:
        history = [pose_payload(pullup_pose(chin_to_bar=d)) for d in (30, 10, -5, 20, 40)]
        up = self.client.post(
            "/analysis/detect-rep",
            json={"exercise": "pullups", "pose": pose_payload(pullup_pose(chin_to_bar=60.0)), "history": history},
        )
        self.assertEqual(up.json(), {"rep_detected": True})
        short = self.client.post(
            "/analysis/detect-rep",
            json={"exercise": "pullups", "pose": pose_payload(pullup_pose(chin_to_bar=60.0)), "history": history[:4]},
        )
        self.assertEqual(short.json(), {"rep_detected": False})

    def test_root_redirects_to_docs(self) -> None:
        resp = self.client.get("/", follow_redirects=False)
        self.assertIn(resp.status_code, (302, 307))
        self.assertEqual(resp.headers["location"], "/docs")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
