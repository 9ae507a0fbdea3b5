"""Integration tests for root CA endpoints."""

from cryptography import x509
from fastapi import status


class TestRootCAExists:
    """Tests for GET /api/root-ca/exists and aliases"""

    def test_exists_false(self, client):
        response = client.get("/api/root-ca/exists")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"exists": False}

    def test_exists_true_with_metadata(self, client_with_ca):
        data = client_with_ca.get("/api/root-ca/exists").json()

        assert data["exists"] is True
        assert data["commonName"] == "Test Root"
        assert "notAfter" in data
        assert data["download_pem"] == "/api/root-ca/download?format=pem"

    def test_aliases(self, client_with_ca):
        for path in ("/api/root-ca/exsists", "/api/ca/status"):
            response = client_with_ca.get(path)

            assert response.status_code == status.HTTP_200_OK
            assert response.json()["exists"] is True


class TestRootCAGenerate:
    """Tests for POST /api/root-ca/generate"""

    def test_generate(self, client):
        response = client.post(
            "/api/root-ca/generate",
            json={"commonName": "Lab Root", "days": 10, "keySize": 1024, "algorithm": "sha384"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Root CA generated"
        assert data["commonName"] == "Lab Root"
        assert data["days"] == 10
        assert data["keySize"] == 1024
        assert data["algorithm"] == "sha384"

    def test_generate_conflict_without_force(self, client_with_ca):
        response = client_with_ca.post(
            "/api/root-ca/generate", json={"days": 10, "keySize": 1024}
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error"] == "CA already exists"

    def test_generate_force(self, client_with_ca):
        for flag in ("1", "true"):
            response = client_with_ca.post(
                f"/api/root-ca/generate?force={flag}",
                json={"commonName": "Replaced", "days": 10, "keySize": 1024},
            )

            assert response.status_code == status.HTTP_200_OK

        assert client_with_ca.get("/api/root-ca/exists").json()["commonName"] == "Replaced"

    def test_generate_invalid_days(self, client):
        response = client.post("/api/root-ca/generate", json={"days": 0, "keySize": 1024})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "days" in response.json()["detail"]

    def test_generate_invalid_key_size(self, client):
        response = client.post("/api/root-ca/generate", json={"days": 10, "keySize": 3000})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid keySize. Allowed: 1024, 2048, 4096"

    def test_generate_non_numeric_days(self, client):
        response = client.post("/api/root-ca/generate", json={"days": "many", "keySize": "1024"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid days value"

    def test_generate_accepts_numeric_strings(self, client):
        response = client.post(
            "/api/root-ca/generate", json={"days": "30", "keySize": "1024"}
        )

        assert response.status_code == status.HTTP_200_OK


class TestRootCAUpload:
    """Tests for POST /api/root-ca/upload"""

    def test_upload_missing_pem(self, client):
        response = client.post("/api/root-ca/upload", json={"private": "", "public": ""})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Both private and public PEM must be provided"

    def test_upload_invalid_pem(self, client):
        response = client.post(
            "/api/root-ca/upload", json={"private": "abc", "public": "def"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid PEM format"

    def test_upload_replaces_existing(self, client_with_ca, storage_dir):
        key_pem = (storage_dir / "root-key.pem").read_text()
        cert_pem = (storage_dir / "root-crt.pem").read_text()

        for path in ("/api/root-ca/upload", "/api/root-ca/import"):
            response = client_with_ca.post(path, json={"private": key_pem, "public": cert_pem})

            assert response.status_code == status.HTTP_200_OK
            assert response.json() == {"message": "Root CA uploaded"}


class TestRootCADownload:
    """Tests for GET /api/root-ca/download"""

    def test_download_without_ca(self, client):
        response = client.get("/api/root-ca/download")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_download_pem_and_der(self, client_with_ca):
        pem = client_with_ca.get("/api/root-ca/download?format=pem")
        der = client_with_ca.get("/api/root-ca/download?format=der")

        assert pem.status_code == der.status_code == status.HTTP_200_OK
        assert x509.load_pem_x509_certificate(pem.content) == (
            x509.load_der_x509_certificate(der.content)
        )

    def test_download_unknown_format(self, client_with_ca):
        response = client_with_ca.get("/api/root-ca/download?format=p12")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
