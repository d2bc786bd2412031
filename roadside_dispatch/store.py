"""Dispatch store: requests, contacts, users, admins and assignments.

The whole datastore is one JSON document kept in a single database row. Every
operation reads the full document, applies its change in memory and writes the
full document back in one transaction, all while holding the store's mutex.
"""

import copy
import json
import logging
import threading
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from .config import STRICT_LOAD
from .database import Base, SessionLocal
from .errors import NotFoundError, PersistenceError
from .models import DispatchDocument
from .schemas import RequestStatus
from .seed import seed_document
from .utils import MonotonicClock, next_id, parse_timestamp, text_sort_key

DOCUMENT_NAME = "dispatch"
COLLECTIONS = ("requests", "contacts", "users", "admins", "assignments")

ENTITY_LABELS = {
    "requests": "Request",
    "contacts": "Contact",
    "users": "User",
    "admins": "Admin",
    "assignments": "Assignment",
}


def empty_document() -> dict:
    return {name: [] for name in COLLECTIONS}


def normalize_document(doc) -> dict:
    """Fill in missing collections and adopt the legacy ``operators`` list.

    Raises ``ValueError`` when the document or any collection entry is not a
    JSON object.
    """
    if not isinstance(doc, dict):
        raise ValueError("dispatch document is not a JSON object")
    if not isinstance(doc.get("contacts"), list) and isinstance(doc.get("operators"), list):
        logging.info("Adopting legacy operators collection as contacts")
        doc["contacts"] = doc.pop("operators")
    for name in COLLECTIONS:
        if not isinstance(doc.get(name), list):
            doc[name] = []
        elif not all(isinstance(record, dict) for record in doc[name]):
            raise ValueError(f"dispatch collection {name!r} holds a non-object entry")
    return doc


def _index(records: list) -> dict:
    # First record wins for a repeated id, like a linear search would
    index = {}
    for record in records:
        index.setdefault(record.get("id"), record)
    return index


def _newest_first(records: list) -> list:
    return sorted(records, key=lambda r: parse_timestamp(r.get("createdAt")), reverse=True)


class DispatchStore:
    def __init__(self, session_factory=SessionLocal, strict_load: bool = STRICT_LOAD, clock=None):
        self._session_factory = session_factory
        self._strict_load = strict_load
        self._clock = clock or MonotonicClock()
        self._lock = threading.RLock()

    # ────────────────────────────── PERSISTENCE ──────────────────────────────

    def initialize(self) -> None:
        """Create the schema and write the seed document if none exists yet."""
        with self._lock, self._session_factory() as session:
            try:
                Base.metadata.create_all(bind=session.get_bind())
                exists = session.get(DispatchDocument, DOCUMENT_NAME) is not None
                if not exists:
                    payload = json.dumps(seed_document(self._clock.now_iso()), indent=2)
                    session.add(DispatchDocument(name=DOCUMENT_NAME, data=payload))
                    session.commit()
                    logging.info("Database initialized with sample data.")
            except SQLAlchemyError as exc:
                session.rollback()
                raise PersistenceError(f"Error initializing database: {exc}") from exc
            if exists:
                self._observe(self._read(session))

    def _observe(self, doc: dict) -> None:
        for name in COLLECTIONS:
            for record in doc[name]:
                self._clock.observe(record.get("updatedAt") or record.get("createdAt"))

    def _read(self, session) -> dict:
        try:
            row = session.get(DispatchDocument, DOCUMENT_NAME)
            if row is None:
                return empty_document()
            return normalize_document(json.loads(row.data))
        except (SQLAlchemyError, ValueError) as exc:
            session.rollback()
            if self._strict_load:
                raise PersistenceError(f"Error reading database: {exc}") from exc
            logging.error("Error reading database, continuing with empty collections: %s", exc)
            return empty_document()

    def _write(self, session, doc: dict) -> None:
        try:
            payload = json.dumps(doc, indent=2)
            session.merge(DispatchDocument(name=DOCUMENT_NAME, data=payload))
            session.commit()
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            session.rollback()
            logging.exception("Error writing database")
            raise PersistenceError(f"Error writing database: {exc}") from exc

    @contextmanager
    def _transaction(self, write: bool = True):
        with self._lock, self._session_factory() as session:
            doc = self._read(session)
            yield doc
            if write:
                self._write(session, doc)

    def snapshot(self) -> dict:
        with self._transaction(write=False) as doc:
            return copy.deepcopy(doc)

    def apply(self, mutate):
        """Run ``mutate(doc)`` inside one transaction and persist the result."""
        with self._transaction() as doc:
            return copy.deepcopy(mutate(doc))

    # ────────────────────────────── GENERIC HELPERS ──────────────────────────────

    def _find(self, doc: dict, collection: str, entity_id) -> dict:
        entity_id = int(entity_id)
        for record in doc[collection]:
            if record.get("id") == entity_id:
                return record
        raise NotFoundError(ENTITY_LABELS[collection], entity_id)

    def _list_sorted(self, collection: str, field: str) -> list:
        with self._transaction(write=False) as doc:
            records = copy.deepcopy(doc[collection])
        return sorted(records, key=lambda r: text_sort_key(r.get(field)))

    def _create(self, collection: str, fields: dict) -> dict:
        with self._transaction() as doc:
            record = {"id": next_id(doc[collection]), **fields, "createdAt": self._clock.now_iso()}
            doc[collection].append(record)
        logging.info("Created %s %s", ENTITY_LABELS[collection].lower(), record["id"])
        return copy.deepcopy(record)

    def _update(self, collection: str, entity_id, fields: dict) -> None:
        with self._transaction() as doc:
            # Full replacement: omitted fields are stored as null
            self._find(doc, collection, entity_id).update(fields)
        logging.info("Updated %s %s", ENTITY_LABELS[collection].lower(), entity_id)

    def _delete(self, collection: str, entity_id, cascade_key: str | None = None) -> None:
        with self._transaction() as doc:
            record = self._find(doc, collection, entity_id)
            removed = 0
            if cascade_key is not None:
                kept = [a for a in doc["assignments"] if a.get(cascade_key) != record["id"]]
                removed = len(doc["assignments"]) - len(kept)
                doc["assignments"] = kept
            doc[collection] = [r for r in doc[collection] if r is not record]
        logging.info(
            "Deleted %s %s (%d assignment(s) removed)",
            ENTITY_LABELS[collection].lower(),
            record["id"],
            removed,
        )

    # ────────────────────────────── REQUESTS ──────────────────────────────

    def list_requests(self) -> list:
        with self._transaction(write=False) as doc:
            assignments = {}
            for assignment in doc["assignments"]:
                assignments.setdefault(assignment.get("requestId"), assignment)
            contacts = _index(doc["contacts"])
            users = _index(doc["users"])
            views = []
            for request in doc["requests"]:
                assignment = assignments.get(request.get("id"))
                contact = contacts.get(assignment.get("contactId")) if assignment else None
                user = users.get(assignment.get("userId")) if assignment else None
                views.append({
                    **copy.deepcopy(request),
                    "contactName": contact.get("name") if contact else None,
                    "contactRole": contact.get("role") if contact else None,
                    "userName": user.get("username") if user else None,
                })
        return _newest_first(views)

    def create_request(self, user_info, image_ref: str | None = None) -> dict:
        with self._transaction() as doc:
            now = self._clock.now_iso()
            record = {
                "id": next_id(doc["requests"]),
                "userInfo": user_info,
                "imageUrl": image_ref or None,
                "status": RequestStatus.SUBMITTED.value,
                "createdAt": now,
                "updatedAt": now,
            }
            doc["requests"].append(record)
        logging.info("Created request %s", record["id"])
        return copy.deepcopy(record)

    def update_request_status(self, request_id, status) -> None:
        # Any text is accepted as a status
        with self._transaction() as doc:
            request = self._find(doc, "requests", request_id)
            request["status"] = status
            request["updatedAt"] = self._clock.now_iso()
        logging.info("Request %s status set to %r", request_id, status)

    def delete_request(self, request_id) -> None:
        self._delete("requests", request_id, cascade_key="requestId")

    # ────────────────────────────── CONTACTS ──────────────────────────────

    def list_contacts(self) -> list:
        return self._list_sorted("contacts", "name")

    def create_contact(self, name, phone, email, role) -> dict:
        return self._create("contacts", {"name": name, "phone": phone, "email": email, "role": role})

    def update_contact(self, contact_id, name=None, phone=None, email=None, role=None) -> None:
        self._update("contacts", contact_id, {"name": name, "phone": phone, "email": email, "role": role})

    def delete_contact(self, contact_id) -> None:
        self._delete("contacts", contact_id, cascade_key="contactId")

    # ────────────────────────────── USERS ──────────────────────────────

    def list_users(self) -> list:
        return self._list_sorted("users", "username")

    def create_user(self, username, email, role, status) -> dict:
        return self._create("users", {"username": username, "email": email, "role": role, "status": status})

    def update_user(self, user_id, username=None, email=None, role=None, status=None) -> None:
        self._update("users", user_id, {"username": username, "email": email, "role": role, "status": status})

    def delete_user(self, user_id) -> None:
        self._delete("users", user_id, cascade_key="userId")

    # ────────────────────────────── ADMINS ──────────────────────────────

    def list_admins(self) -> list:
        return self._list_sorted("admins", "name")

    def create_admin(self, name, username, email, phone, level, status) -> dict:
        return self._create("admins", {
            "name": name,
            "username": username,
            "email": email,
            "phone": phone,
            "level": level,
            "status": status,
        })

    def update_admin(self, admin_id, name=None, username=None, email=None, phone=None, level=None, status=None) -> None:
        self._update("admins", admin_id, {
            "name": name,
            "username": username,
            "email": email,
            "phone": phone,
            "level": level,
            "status": status,
        })

    def delete_admin(self, admin_id) -> None:
        self._delete("admins", admin_id)

    # ────────────────────────────── ASSIGNMENTS ──────────────────────────────

    def list_assignments(self) -> list:
        with self._transaction(write=False) as doc:
            requests = _index(doc["requests"])
            contacts = _index(doc["contacts"])
            users = _index(doc["users"])
            views = []
            for assignment in doc["assignments"]:
                request = requests.get(assignment.get("requestId"))
                contact = contacts.get(assignment.get("contactId"))
                user = users.get(assignment.get("userId"))
                views.append({
                    **copy.deepcopy(assignment),
                    "userInfo": request.get("userInfo") if request else None,
                    "imageUrl": request.get("imageUrl") if request else None,
                    "requestStatus": request.get("status") if request else None,
                    "contactName": contact.get("name") if contact else None,
                    "contactRole": contact.get("role") if contact else None,
                    "userName": user.get("username") if user else None,
                })
        return _newest_first(views)

    def upsert_assignment(self, request_id, contact_id, user_id, status) -> dict:
        """Create or replace the single assignment of a request.

        The referenced request, when present, is always moved to "In Progress",
        whatever assignment status the caller passes. Contact and user ids are
        not checked.
        """
        request_id, contact_id, user_id = int(request_id), int(contact_id), int(user_id)
        with self._transaction() as doc:
            now = self._clock.now_iso()
            assignment = next((a for a in doc["assignments"] if a.get("requestId") == request_id), None)
            if assignment is not None:
                assignment.update(contactId=contact_id, userId=user_id, status=status)
                logging.info("Updated assignment %s for request %s", assignment["id"], request_id)
            else:
                assignment = {
                    "id": next_id(doc["assignments"]),
                    "requestId": request_id,
                    "contactId": contact_id,
                    "userId": user_id,
                    "status": status,
                    "createdAt": now,
                }
                doc["assignments"].append(assignment)
                logging.info("Created assignment %s for request %s", assignment["id"], request_id)

            request = next((r for r in doc["requests"] if r.get("id") == request_id), None)
            if request is not None:
                request["status"] = RequestStatus.IN_PROGRESS.value
                request["updatedAt"] = now
            return copy.deepcopy(assignment)


_default_store: DispatchStore | None = None
_default_store_lock = threading.Lock()


def get_store() -> DispatchStore:
    global _default_store
    with _default_store_lock:
        if _default_store is None:
            store = DispatchStore()
            store.initialize()
            _default_store = store
    return _default_store
