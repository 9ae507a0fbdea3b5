"""Tests for the local artifact repository."""

import pytest

from simpleca.infrastructure.implementations.local import LocalArtifactRepository
from simpleca.infrastructure.repositories import UnsafePathError


@pytest.fixture
def artifact_repo(tmp_path):
    """Artifact repository over a temporary directory."""
    return LocalArtifactRepository(base_dir=str(tmp_path))


@pytest.mark.asyncio
async def test_reserve_names_uses_base_when_free(artifact_repo):
    names = await artifact_repo.reserve_names("examplecom")

    assert names.cert_file == "examplecom.crt.pem"
    assert names.key_file == "examplecom.key.pem"
    assert names.chain_file == "examplecom-fullchain.pem"


@pytest.mark.asyncio
async def test_reserve_names_skips_stray_files(artifact_repo, tmp_path):
    """Any existing artifact file, even an unregistered one, forces a suffix."""
    (tmp_path / "examplecom.key.pem").write_text("stray")
    (tmp_path / "examplecom-1-fullchain.pem").write_text("stray")

    names = await artifact_repo.reserve_names("examplecom")

    assert names.names() == [
        "examplecom-2.crt.pem",
        "examplecom-2.key.pem",
        "examplecom-2-fullchain.pem",
    ]


@pytest.mark.asyncio
async def test_write_new_refuses_existing_file(artifact_repo, tmp_path):
    (tmp_path / "a.crt.pem").write_text("original")

    with pytest.raises(FileExistsError):
        await artifact_repo.write_new("a.crt.pem", b"new", mode=0o644)

    assert (tmp_path / "a.crt.pem").read_text() == "original"


@pytest.mark.asyncio
async def test_write_new_sets_mode(artifact_repo, tmp_path):
    await artifact_repo.write_new("a.key.pem", b"key", mode=0o600)

    assert (tmp_path / "a.key.pem").stat().st_mode & 0o777 == 0o600


@pytest.mark.parametrize(
    "reference", ["../outside.pem", "/etc/passwd", "", ".", "sub/../../x.pem"]
)
def test_resolve_rejects_unsafe_references(artifact_repo, reference):
    with pytest.raises(UnsafePathError):
        artifact_repo.resolve(reference)


def test_resolve_accepts_plain_names(artifact_repo, tmp_path):
    assert artifact_repo.resolve("a.crt.pem") == tmp_path / "a.crt.pem"


@pytest.mark.asyncio
async def test_delete_reports_missing(artifact_repo, tmp_path):
    (tmp_path / "a.crt.pem").write_text("x")

    assert await artifact_repo.delete("a.crt.pem") is True
    assert await artifact_repo.delete("a.crt.pem") is False


@pytest.mark.asyncio
async def test_discard_is_best_effort(artifact_repo, tmp_path):
    (tmp_path / "a.crt.pem").write_text("x")

    await artifact_repo.discard(["a.crt.pem", "missing.pem", "../escape.pem"])

    assert not (tmp_path / "a.crt.pem").exists()


@pytest.mark.asyncio
async def test_reserve_names_skips_dangling_symlinks(artifact_repo, tmp_path):
    """A symlink to a missing target still occupies the name."""
    (tmp_path / "examplecom.crt.pem").symlink_to(tmp_path / "gone")

    names = await artifact_repo.reserve_names("examplecom")

    assert names.cert_file == "examplecom-1.crt.pem"
    await artifact_repo.write_new(names.cert_file, b"cert", mode=0o644)
