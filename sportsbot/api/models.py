"""Pydantic models for football-data.org and api-sports responses.

Numeric fields the upstream may omit are Optional; None means unknown and
is rendered as "-", never as 0.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

# ── Football (football-data.org) ──


class Competition(BaseModel):
    id: int | None = None
    name: str = ""
    code: str | None = None


class TeamRef(BaseModel):
    id: int | None = None
    name: str = ""
    shortName: str | None = None

    @property
    def short(self) -> str:
        return self.shortName or self.name


class StandingRow(BaseModel):
    position: int
    team: TeamRef
    playedGames: int | None = None
    won: int | None = None
    draw: int | None = None
    lost: int | None = None
    points: int | None = None
    goalsFor: int | None = None
    goalsAgainst: int | None = None
    goalDifference: int | None = None


class StandingGroup(BaseModel):
    type: str = "TOTAL"
    table: list[StandingRow] = Field(default_factory=list)


class Standings(BaseModel):
    competition: Competition | None = None
    standings: list[StandingGroup] = Field(default_factory=list)


class ScoreLine(BaseModel):
    home: int | None = None
    away: int | None = None


class MatchScore(BaseModel):
    winner: str | None = None
    fullTime: ScoreLine | None = None


class Match(BaseModel):
    id: int | None = None
    utcDate: datetime
    status: str = "SCHEDULED"
    matchday: int | None = None
    competition: Competition | None = None
    homeTeam: TeamRef
    awayTeam: TeamRef
    score: MatchScore | None = None

    @property
    def is_live_or_finished(self) -> bool:
        return self.status in ("IN_PLAY", "PAUSED", "FINISHED")


class MatchList(BaseModel):
    competition: Competition | None = None
    matches: list[Match] = Field(default_factory=list)


class Person(BaseModel):
    id: int | None = None
    name: str
    dateOfBirth: str | None = None
    nationality: str | None = None
    position: str | None = None


class Scorer(BaseModel):
    player: Person
    team: TeamRef
    goals: int | None = None
    assists: int | None = None
    penalties: int | None = None


class ScorerList(BaseModel):
    competition: Competition | None = None
    scorers: list[Scorer] = Field(default_factory=list)


class Team(BaseModel):
    id: int
    name: str
    shortName: str | None = None
    founded: int | None = None
    venue: str | None = None
    clubColors: str | None = None
    squad: list[Person] = Field(default_factory=list)


class PersonList(BaseModel):
    persons: list[Person] = Field(default_factory=list)


# ── Basketball (api-sports) ──


class Country(BaseModel):
    name: str | None = None
    code: str | None = None


class NamedRef(BaseModel):
    id: int | None = None
    name: str = ""


class Birth(BaseModel):
    date: str | None = None
    country: str | None = None


class Player(BaseModel):
    id: int
    name: str
    firstname: str | None = None
    lastname: str | None = None
    birth: Birth | None = None
    country: str | None = None
    position: str | None = None
    height: str | None = None
    weight: str | None = None
    team: NamedRef | None = None
    leagues: list[NamedRef] = Field(default_factory=list)

    @field_validator("height", "weight", mode="before")
    @classmethod
    def measure_as_text(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @property
    def nationality(self) -> str | None:
        if self.birth and self.birth.country:
            return self.birth.country
        return self.country


class GameStatus(BaseModel):
    long: str = ""
    short: str | None = None


class GameTeams(BaseModel):
    home: NamedRef
    away: NamedRef


class TeamScore(BaseModel):
    total: int | None = None


class GameScores(BaseModel):
    home: TeamScore = Field(default_factory=TeamScore)
    away: TeamScore = Field(default_factory=TeamScore)


class Game(BaseModel):
    id: int
    date: datetime
    status: GameStatus = Field(default_factory=GameStatus)
    league: NamedRef | None = None
    teams: GameTeams
    scores: GameScores = Field(default_factory=GameScores)


class BasketballTeam(BaseModel):
    id: int
    name: str
    country: Country | None = None
    logo: str | None = None

    @field_validator("country", mode="before")
    @classmethod
    def country_from_name(cls, v):
        if isinstance(v, str):
            return {"name": v}
        return v


class WinLoss(BaseModel):
    total: int | None = None
    percentage: str | None = None


class StandingGames(BaseModel):
    played: int | None = None
    win: WinLoss = Field(default_factory=WinLoss)
    lose: WinLoss = Field(default_factory=WinLoss)


class BasketballStanding(BaseModel):
    position: int
    team: NamedRef
    games: StandingGames = Field(default_factory=StandingGames)


class PlayerSeasonStats(BaseModel):
    games: int | None = None
    points: float | None = None
    assists: float | None = None
    rebounds: float | None = None
    steals: float | None = None
    blocks: float | None = None
