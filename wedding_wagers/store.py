"""
In-memory document store

Holds the four collections the wager workflows read and write:
- bets: admin-authored questions
- answers: user submissions (append-only)
- keys: answer keys (append-only)
- homepageWinners: published winners (fully replaced on each publish)

Documents are plain dicts in camelCase. Every read returns copies, so
callers work on a snapshot.
"""
import copy
import logging
import uuid
from typing import Callable, Dict, List, Optional

from wedding_wagers.errors import StoreError


logger = logging.getLogger(__name__)

BETS = "bets"
ANSWERS = "answers"
KEYS = "keys"
HOMEPAGE_WINNERS = "homepageWinners"

COLLECTIONS = (BETS, ANSWERS, KEYS, HOMEPAGE_WINNERS)

Snapshot = List[Dict]
Listener = Callable[[Snapshot], None]


class DocumentStore:
    """Collections of documents keyed by store-assigned ids"""

    def __init__(self, collections=COLLECTIONS):
        self._collections: Dict[str, Dict[str, Dict]] = {name: {} for name in collections}
        self._listeners: Dict[str, List[Listener]] = {name: [] for name in collections}

    def _collection(self, name: str) -> Dict[str, Dict]:
        if name not in self._collections:
            raise StoreError(f"Unknown collection: {name}")
        return self._collections[name]

    @staticmethod
    def _with_id(doc_id: str, data: Dict) -> Dict:
        doc = copy.deepcopy(data)
        doc["id"] = doc_id
        return doc

    def insert(self, collection: str, data: Dict) -> str:
        """Add a document and return its new id"""
        docs = self._collection(collection)
        doc_id = uuid.uuid4().hex
        body = copy.deepcopy(data)
        body.pop("id", None)
        docs[doc_id] = body
        self._notify(collection)
        return doc_id

    def get(self, collection: str, doc_id: str) -> Optional[Dict]:
        body = self._collection(collection).get(doc_id)
        if body is None:
            return None
        return self._with_id(doc_id, body)

    def scan(self, collection: str) -> Snapshot:
        """All documents in insertion order"""
        return [self._with_id(doc_id, body) for doc_id, body in self._collection(collection).items()]

    def count(self, collection: str) -> int:
        return len(self._collection(collection))

    def delete(self, collection: str, doc_id: str) -> bool:
        docs = self._collection(collection)
        if doc_id not in docs:
            return False
        del docs[doc_id]
        self._notify(collection)
        return True

    def replace_all(self, collection: str, documents: List[Dict]) -> List[str]:
        """
        Blindly overwrite a collection

        The previous contents are dropped, never merged. Last write wins.
        """
        docs = self._collection(collection)
        docs.clear()
        ids = []
        for data in documents:
            doc_id = uuid.uuid4().hex
            body = copy.deepcopy(data)
            body.pop("id", None)
            docs[doc_id] = body
            ids.append(doc_id)
        self._notify(collection)
        return ids

    def subscribe(self, collection: str, listener: Listener) -> Callable[[], None]:
        """
        Call listener with a fresh snapshot whenever the collection changes

        The listener is also called once immediately with the current
        contents. Returns a function that cancels the subscription.
        """
        self._collection(collection)
        listeners = self._listeners[collection]
        listeners.append(listener)
        listener(self.scan(collection))

        def cancel() -> None:
            if listener in listeners:
                listeners.remove(listener)

        return cancel

    def _notify(self, collection: str) -> None:
        listeners = list(self._listeners[collection])
        if not listeners:
            return
        snapshot = self.scan(collection)
        for listener in listeners:
            try:
                listener(copy.deepcopy(snapshot))
            except Exception as e:
                logger.error(f"Listener on {collection} failed: {type(e).__name__}: {e}", exc_info=True)
