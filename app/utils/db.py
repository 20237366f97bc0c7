from contextlib import contextmanager
import logging
from models import db


@contextmanager
def transactional(message="DB transaction failed", expected=()):
    """Context manager to wrap a database transaction.

    Commits when the block finishes, otherwise rolls back and re-raises.
    Exceptions listed in ``expected`` abort the transaction as a normal
    business outcome and are not logged as errors.
    """
    try:
        yield
        db.session.commit()
    except expected:
        db.session.rollback()
        raise
    except Exception as e:
        logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise
