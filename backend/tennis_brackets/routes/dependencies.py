from fastapi import Depends
from sqlmodel import Session

from tennis_brackets.database import get_session
from tennis_brackets.store import Store


def get_store(session: Session = Depends(get_session)) -> Store:
    return Store(session)
