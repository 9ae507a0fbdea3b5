"""
Deletion of registry entries and their artifact files.

Every referenced path is checked before anything is unlinked. The
registry entry is removed only when all files were deleted or were
already absent.
"""

from dataclasses import asdict, dataclass, field

from loguru import logger

from simpleca.domain.errors import DeletionError, NotFoundError, ValidationError
from simpleca.infrastructure import InfrastructureFactory
from simpleca.infrastructure.repositories import UnsafePathError


@dataclass
class FileError:
    file: str
    error: str


@dataclass
class DeletionReport:
    """Per-file outcome of a deletion."""

    deleted: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DeletionResult:
    name: str
    report: DeletionReport


class DeletionCoordinator:
    """Removes leaf certificates from storage and the registry."""

    def __init__(self, infrastructure_factory: InfrastructureFactory):
        self.registry_repo = infrastructure_factory.get_registry_repository()
        self.artifact_repo = infrastructure_factory.get_artifact_repository()

    async def delete_by_name(self, name: str | None) -> DeletionResult:
        """
        Delete a registry entry and its files.

        Args:
            name: Registry name (trimmed, case-insensitive match)

        Returns:
            The matched name and the deletion report

        Raises:
            ValidationError: If ``name`` is blank
            NotFoundError: If no entry matches
            DeletionError: If a reference is unsafe, a file cannot be
                           removed, or the registry cannot be saved
        """
        if not (name or "").strip():
            raise ValidationError("Missing name")

        async with self.registry_repo.lock():
            registry = await self.registry_repo.load()
            entry = registry.find(name)
            if entry is None:
                raise NotFoundError("Certificate not found")

            report = DeletionReport()
            files = entry.referenced_files()

            for file_name in files:
                try:
                    self.artifact_repo.resolve(file_name)
                except UnsafePathError as e:
                    report.errors.append(FileError(file=file_name, error=str(e)))

            if report.errors:
                logger.error(
                    f"Deletion of {entry.name} refused: "
                    f"{len(report.errors)} unsafe file reference(s)"
                )
                raise DeletionError(
                    "Refusing to delete files outside the storage directory",
                    details=report.to_dict(),
                )

            for file_name in files:
                try:
                    if await self.artifact_repo.delete(file_name):
                        report.deleted.append(file_name)
                    else:
                        report.missing.append(file_name)
                except OSError as e:
                    report.errors.append(
                        FileError(file=file_name, error=e.strerror or type(e).__name__)
                    )

            if report.errors:
                logger.error(f"Deletion of {entry.name} incomplete: {report.errors}")
                raise DeletionError(
                    "Failed to delete some certificate files", details=report.to_dict()
                )

            registry.remove(entry.name)
            try:
                await self.registry_repo.save(registry)
            except OSError as e:
                logger.error(f"Registry update after deleting {entry.name} failed: {e}")
                details = report.to_dict()
                details["registry_error"] = e.strerror or type(e).__name__
                raise DeletionError(
                    "Files deleted but the registry could not be updated",
                    details=details,
                ) from e

        logger.info(
            f"Deleted {entry.name}: deleted={report.deleted}, missing={report.missing}"
        )

        return DeletionResult(name=entry.name, report=report)
