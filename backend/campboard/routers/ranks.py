# backend/campboard/routers/ranks.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from campboard.db import get_db
from campboard.models.rank_threshold import RankThreshold
from campboard.schemas.rank import RankCreate, RankOut, RankUpdate

router = APIRouter(prefix="/ranks", tags=["ranks"])


@router.get("", response_model=List[RankOut])
def list_ranks(active_only: bool = Query(False), db: Session = Depends(get_db)):
    q = select(RankThreshold)
    if active_only:
        q = q.where(RankThreshold.is_active.is_(True))
    return db.scalars(q.order_by(RankThreshold.rank_order)).all()


@router.post("", response_model=RankOut, status_code=201)
def create_rank(payload: RankCreate, db: Session = Depends(get_db)):
    rank = RankThreshold(**payload.model_dump())
    rank.rank_name = rank.rank_name.strip()
    db.add(rank)
    db.commit()
    return rank


@router.patch("/{rank_id}", response_model=RankOut)
def update_rank(rank_id: str, payload: RankUpdate, db: Session = Depends(get_db)):
    rank = db.get(RankThreshold, rank_id)
    if not rank:
        raise HTTPException(status_code=404, detail="Rank threshold not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(rank, key, value)
    db.commit()
    return rank


@router.delete("/{rank_id}", status_code=204)
def delete_rank(rank_id: str, db: Session = Depends(get_db)):
    rank = db.get(RankThreshold, rank_id)
    if not rank:
        raise HTTPException(status_code=404, detail="Rank threshold not found")
    db.delete(rank)
    db.commit()
    return None
