# ballotbox/audit/audit_logger.py

import os
import json
import hashlib
import base64
import logging
import threading
from datetime import datetime, timezone
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

logger = logging.getLogger(__name__)

# Append-only audit trail for election events: every entry carries the hash of
# the previous one and an Ed25519 signature over its own content.

class AuditLogger:
    def __init__(self, log_dir='logs', signing_key=None):
        self.log_dir = log_dir
        self.log_file = os.path.join(log_dir, 'audit.log')
        self.previous_hash = None
        self._lock = threading.Lock()

        os.makedirs(log_dir, exist_ok=True)

        self.signing_key = signing_key or Ed25519PrivateKey.generate()
        self._load_previous_hash()

    def _load_previous_hash(self):
        if os.path.exists(self.log_file):
            with open(self.log_file, 'r') as f:
                lines = f.readlines()
                if lines:
                    try:
                        last_entry = json.loads(lines[-1])
                        self.previous_hash = last_entry.get('hash')
                    except ValueError:
                        logger.warning("Last audit entry is not valid JSON; starting a new chain")
                        self.previous_hash = None

    def log_event(self, event_type, data, user_id=None):
        with self._lock:
            try:
                log_entry = {
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "event_type": event_type,
                    "data": data,
                    "user_id": user_id,
                    "previous_hash": self.previous_hash,
                }
                entry_json = json.dumps(log_entry, sort_keys=True)
                entry_hash = hashlib.sha256(entry_json.encode()).hexdigest()
                log_entry['hash'] = entry_hash

                signature = self.signing_key.sign(entry_json.encode())
                log_entry['signature'] = base64.b64encode(signature).decode()

                with open(self.log_file, 'a') as f:
                    f.write(json.dumps(log_entry) + "\n")

                self.previous_hash = entry_hash
            except OSError as e:
                # audit failures must not fail the request being audited
                logger.error("Audit log write failed: %s", e)

    def verify_log_integrity(self):
        if not os.path.exists(self.log_file):
            return True
        public_key = self.signing_key.public_key()
        previous_hash = None
        try:
            with open(self.log_file, 'r') as f:
                for line in f:
                    if not line.strip():
                        continue
                    log_entry = json.loads(line)
                    if log_entry.get('previous_hash') != previous_hash:
                        return False
                    entry_copy = dict(log_entry)
                    signature = base64.b64decode(entry_copy.pop('signature'))
                    entry_hash = entry_copy.pop('hash')
                    entry_json = json.dumps(entry_copy, sort_keys=True).encode()
                    if hashlib.sha256(entry_json).hexdigest() != entry_hash:
                        return False
                    public_key.verify(signature, entry_json)
                    previous_hash = entry_hash
        except (ValueError, KeyError, TypeError, AttributeError, InvalidSignature):
            return False
        return True


class NullAuditLogger:
    """Stand-in used when no audit directory is configured."""

    def log_event(self, event_type, data, user_id=None):
        logger.debug("audit event %s (audit file disabled)", event_type)

    def verify_log_integrity(self):
        return True
