"""
Tests for the drawing analysis REST API.
"""

import os
import sys
import pytest
import numpy as np
import cv2
from fastapi.testclient import TestClient

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from api.main import create_app
from analysis.drawing_service import create_analysis_service


def encode_png(image):
    ok, encoded = cv2.imencode('.png', image)
    assert ok
    return encoded.tobytes()


def create_test_image(size=(200, 200)):
    image = np.full((size[0], size[1], 3), 255, dtype=np.uint8)
    cv2.rectangle(image, (50, 60), (150, 140), (0, 0, 0), -1)
    return image


class TestDrawingAPI:

    @pytest.fixture
    def client(self):
        return TestClient(create_app(create_analysis_service()))

    def upload(self, client, data, filename="drawing.png", child_id="child-1"):
        return client.post(
            "/analyze",
            files={"file": (filename, data, "image/png")},
            data={"child_id": child_id}
        )

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["stored_analyses"] == 0

    def test_analyze_and_retrieve(self, client):
        response = self.upload(client, encode_png(create_test_image()))

        assert response.status_code == 200
        body = response.json()
        assert body["child_id"] == "child-1"
        assert body["risk_level"] in ("low", "medium", "high")
        assert body["report"]["file_name"] == "drawing.png"
        assert "emotions" in body["report"]

        analysis_id = body["analysis_id"]
        stored = client.get(f"/analyses/{analysis_id}")
        assert stored.status_code == 200
        assert stored.json()["report"] == body["report"]

        history = client.get("/children/child-1/analyses")
        assert history.status_code == 200
        assert [a["analysis_id"] for a in history.json()] == [analysis_id]

        assert client.get("/health").json()["stored_analyses"] == 1

    def test_unsupported_format(self, client):
        response = self.upload(client, b"plain text", filename="notes.txt")

        assert response.status_code == 400

    def test_corrupt_image(self, client):
        response = self.upload(client, b"definitely not a png")

        assert response.status_code == 400
        assert client.get("/health").json()["stored_analyses"] == 0

    def test_empty_upload(self, client):
        response = self.upload(client, b"")

        assert response.status_code == 400

    def test_missing_child_id(self, client):
        response = client.post(
            "/analyze",
            files={"file": ("drawing.png", encode_png(create_test_image()), "image/png")}
        )

        assert response.status_code == 422

    def test_unknown_analysis(self, client):
        assert client.get("/analyses/does-not-exist").status_code == 404

    def test_unknown_child_has_no_analyses(self, client):
        response = client.get("/children/nobody/analyses")

        assert response.status_code == 200
        assert response.json() == []

    def test_color_analysis_is_not_stored(self, client):
        image = np.zeros((50, 50, 3), dtype=np.uint8)

        response = client.post(
            "/analyze/colors",
            files={"file": ("black.png", encode_png(image), "image/png")}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["distribution"] == {"black": 100.0}
        assert body["dominant_color"] == "black"
        assert client.get("/health").json()["stored_analyses"] == 0
