from typing import Generator
from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.database import SessionLocal
from app.db.models.technicians import Technicians


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_active_technician(technician_id: int, db: Session) -> Technicians:
    """Load a technician or raise 404"""
    technician = db.query(Technicians).filter(Technicians.id == technician_id).first()
    if not technician or not technician.is_active:
        raise HTTPException(status_code=404, detail="Technician not found")
    return technician
