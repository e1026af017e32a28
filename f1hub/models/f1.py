from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import relationship

from f1hub.db.base import Base


# Reference data, written once by the seed and read-only here

class Team(Base):
    __tablename__ = "teams"
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False, unique=True)
    base = Column(String, nullable=True)
    color = Column(String, nullable=True)
    drivers = relationship("Driver", back_populates="team")


class Driver(Base):
    __tablename__ = "drivers"
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    number = Column(Integer, nullable=False, unique=True)
    nationality = Column(String, nullable=True)
    team_id = Column(String, ForeignKey("teams.id"))
    team_color = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)     # filled in by the portrait job
    team = relationship("Team", back_populates="drivers")


class Race(Base):
    __tablename__ = "races"
    id = Column(String, primary_key=True)
    round = Column(Integer, nullable=False, unique=True)
    name = Column(String, nullable=False)
    circuit = Column(String, nullable=True)
    country = Column(String, nullable=True)
    date = Column(Date, nullable=False)


# Derived data, owned by the sync job

class RaceResultDocument(Base):
    __tablename__ = "results"
    id = Column(String, primary_key=True)         # ResultKey encoding, e.g. "2026_05"
    season = Column(Integer, nullable=False)
    round = Column(Integer, nullable=False)
    race_name = Column(String, nullable=False)
    date = Column(String, nullable=True)          # race day as sent by the provider
    circuit = Column(String, nullable=True)
    results = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime, nullable=False, server_default=func.now())


class StandingsDocument(Base):
    __tablename__ = "standings"
    id = Column(String, primary_key=True)         # "drivers" | "constructors"
    season = Column(Integer, nullable=False)
    round = Column(Integer, nullable=False)
    standings = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime, nullable=False, server_default=func.now())


# User generated data

class UserProfile(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True)         # identity provider uid
    display_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    favourite_driver_id = Column(String, ForeignKey("drivers.id"), nullable=True)
    chat_facts = Column(JSON, nullable=False, default=list)
    chat_recent = Column(JSON, nullable=False, default=list)


class Comment(Base):
    __tablename__ = "comments"
    __table_args__ = (Index("ix_comments_race_created", "race_id", "created_at"),)
    id = Column(Integer, primary_key=True, autoincrement=True)
    race_id = Column(String, ForeignKey("races.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String, nullable=False)
    display_name = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)
    text = Column(String(500), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class Prediction(Base):
    __tablename__ = "predictions"
    __table_args__ = (Index("ix_predictions_user_race", "user_id", "race_id"),)
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False)
    display_name = Column(String, nullable=True)
    race_id = Column(String, ForeignKey("races.id", ondelete="CASCADE"), nullable=False)
    race_name = Column(String, nullable=False)
    predicted_winner = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
