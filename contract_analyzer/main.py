import argparse
import json
import mimetypes
import sys
from pathlib import Path
from typing import Any

from contract_analyzer.config.settings import Settings
from contract_analyzer.database.connection import apply_schema, close_pool, init_pool
from contract_analyzer.database.repositories.base import BaseDocumentStore
from contract_analyzer.database.repositories.documents_repository import DocumentsRepository
from contract_analyzer.extraction.factory import DOCX
from contract_analyzer.logging.logger import Log
from contract_analyzer.processor.exceptions import DocumentNotFoundError, PersistenceError
from contract_analyzer.processor.processor import build_processor
from contract_analyzer.storage.file_storage import FileStorage
from contract_analyzer.upload.exceptions import UploadValidationError
from contract_analyzer.upload.registrar import DocumentRegistrar
from contract_analyzer.worker.request_runner import RequestRunner

mimetypes.add_type(DOCX, ".docx")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="contract-analyzer",
        description="Upload legal documents and run contract analysis.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    upload = commands.add_parser("upload", help="Register a PDF, DOCX or TXT file.")
    upload.add_argument("path", type=Path, help="File to upload.")
    upload.add_argument(
        "--content-type",
        default=None,
        help="Override the content type guessed from the file name.",
    )

    process = commands.add_parser("process", help="Run the analysis pipeline once.")
    process.add_argument("document_id")

    show = commands.add_parser("show", help="Print one document with its analysis.")
    show.add_argument("document_id")

    commands.add_parser("list", help="List all documents.")
    commands.add_parser("init-db", help="Create the documents table.")
    return parser.parse_args(argv)


def _emit(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")


def _upload(
    settings: Settings,
    store: BaseDocumentStore,
    path: Path,
    content_type: str | None,
) -> int:
    guessed, _ = mimetypes.guess_type(path.name)
    registrar = DocumentRegistrar(
        FileStorage(settings.files_root),
        store,
        max_upload_bytes=settings.max_upload_bytes,
    )
    try:
        record = registrar.register(path.name, path.read_bytes(), content_type or guessed or "")
    except (OSError, UploadValidationError) as exc:
        _emit({"success": False, "error": str(exc)})
        return 1
    except PersistenceError as exc:
        Log.error(f"Upload of {path.name} failed: {exc}")
        _emit({"success": False, "error": "Upload failed"})
        return 1
    _emit({"success": True, "data": record.to_payload()})
    return 0


def _process(settings: Settings, store: BaseDocumentStore, document_id: str) -> int:
    runner = RequestRunner(build_processor(settings, store=store))
    response = runner.run(json.dumps({"documentId": document_id}))
    _emit(response.to_payload())
    return 0 if response.success else 1


def _show(store: BaseDocumentStore, document_id: str) -> int:
    try:
        record = store.find_by_id(document_id)
    except DocumentNotFoundError:
        _emit({"success": False, "error": "Document not found"})
        return 1
    except PersistenceError as exc:
        Log.error(f"Reading document {document_id} failed: {exc}")
        _emit({"success": False, "error": "Failed to read document"})
        return 1
    _emit({"success": True, "data": record.to_payload()})
    return 0


def _list(store: BaseDocumentStore) -> int:
    try:
        summaries = store.list_summaries()
    except PersistenceError as exc:
        Log.error(f"Listing documents failed: {exc}")
        _emit({"success": False, "error": "Failed to list documents"})
        return 1
    _emit({"success": True, "data": [summary.to_payload() for summary in summaries]})
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point: initialize pool -> run one command -> close pool."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        store = DocumentsRepository()
        if args.command == "init-db":
            apply_schema()
            Log.info("Documents schema applied")
            return 0
        if args.command == "upload":
            return _upload(settings, store, args.path, args.content_type)
        if args.command == "process":
            return _process(settings, store, args.document_id)
        if args.command == "show":
            return _show(store, args.document_id)
        return _list(store)
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
