"""
Maintenance commands for the dispatch store.

    python -m roadside_dispatch.maintenance clean [--placeholder PATH]
    python -m roadside_dispatch.maintenance import-json database.json
"""
import argparse
import json
import logging

from .store import DispatchStore, get_store, normalize_document

PLACEHOLDER = "/uploads/placeholder.png"


def clean_requests(store: DispatchStore, placeholder: str = PLACEHOLDER) -> dict:
    """Drop duplicate requests, renumber the rest and fill in missing photos.

    Two requests are duplicates when both ``userInfo`` and ``imageUrl`` match;
    the first one stored is kept. Assignments follow their request to its new
    id, and assignments of dropped duplicates are removed.
    """

    def _clean(doc: dict) -> dict:
        seen = set()
        id_map = {}
        cleaned = []
        for request in doc["requests"]:
            key = (request.get("userInfo"), request.get("imageUrl"))
            if key in seen:
                continue
            seen.add(key)
            new_id = len(cleaned) + 1
            id_map.setdefault(request.get("id"), new_id)
            cleaned.append({
                **request,
                "id": new_id,
                "imageUrl": placeholder if request.get("imageUrl") is None else request["imageUrl"],
            })

        assignments = []
        for assignment in doc["assignments"]:
            new_request_id = id_map.get(assignment.get("requestId"))
            if new_request_id is None:
                continue
            assignments.append({**assignment, "requestId": new_request_id})

        summary = {
            "kept": len(cleaned),
            "removed": len(doc["requests"]) - len(cleaned),
            "assignmentsRemoved": len(doc["assignments"]) - len(assignments),
        }
        doc["requests"] = cleaned
        doc["assignments"] = assignments
        return summary

    summary = store.apply(_clean)
    logging.info("Requests cleaned: %s", summary)
    return summary


def import_document(store: DispatchStore, path: str) -> dict:
    """Replace the stored document with the contents of a JSON file.

    Raises ``ValueError`` when the file is not a JSON object of collections;
    the stored document is left untouched in that case.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    try:
        loaded = normalize_document(raw)
    except ValueError as exc:
        raise ValueError(f"Cannot import {path}: {exc}") from exc

    def _replace(doc: dict) -> dict:
        doc.clear()
        doc.update(loaded)
        return {name: len(records) for name, records in loaded.items() if isinstance(records, list)}

    counts = store.apply(_replace)
    logging.info("Imported %s from %s", counts, path)
    return counts


def main(argv=None):
    parser = argparse.ArgumentParser(prog="roadside_dispatch.maintenance")
    sub = parser.add_subparsers(dest="command", required=True)

    clean = sub.add_parser("clean", help="Remove duplicate requests and renumber the rest")
    clean.add_argument("--placeholder", default=PLACEHOLDER, help="Image path used when a request has no photo")

    imp = sub.add_parser("import-json", help="Load a JSON datastore file into the database")
    imp.add_argument("path")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    store = get_store()
    if args.command == "clean":
        result = clean_requests(store, args.placeholder)
    else:
        try:
            result = import_document(store, args.path)
        except (OSError, ValueError) as exc:
            parser.error(str(exc))
    print(json.dumps(result))


if __name__ == "__main__":
    main()
