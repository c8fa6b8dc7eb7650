"""
Shared fixtures: a small in-memory competition
"""
import random

import pytest
from fastapi.testclient import TestClient

from huntboard.core.competition import Competition
from huntboard.core.ranking import compute_total
from huntboard.main import create_app
from huntboard.models import Challenge, Player, Settings, Snapshot, Team


def make_seed() -> Snapshot:
    """Four teams, A has 5 personal points, B has 8"""
    teams = [
        Team(id="A", name="Alpha", color="#f00", points=5, players=[
            Player(id="a1", first_name="Ada", last_name="A", personal_points=5),
            Player(id="a2", first_name="Abe", last_name="A"),
        ]),
        Team(id="B", name="Bravo", color="#00f", points=8, players=[
            Player(id="b1", first_name="Bea", last_name="B", personal_points=8),
            Player(id="b2", first_name="Bob", last_name="B"),
        ]),
        Team(id="C", name="Charlie", color="#0f0", players=[
            Player(id="c1", first_name="Cy", last_name="C"),
        ]),
        Team(id="D", name="Delta", color="#ff0", players=[
            Player(id="d1", first_name="Di", last_name="D"),
        ]),
    ]
    challenges = [
        Challenge(id="C1", name="Fountain", points=10, type="normal",
                  available_at="2024-06-01T10:00:00"),
        Challenge(id="C2", name="Golden key", points=20, type="rare",
                  available_at="2024-06-01T11:00:00"),
        Challenge(id="C3", name="Duck", points=15, type="secret",
                  available_at="2024-06-01T12:00:00"),
        Challenge(id="C4", name="Serenade", points=7, type="normal",
                  available_at="2999-01-01T00:00:00"),
    ]
    return Snapshot(teams=teams, challenges=challenges)


def assert_accounting(competition: Competition) -> None:
    """Cached team points must equal the recomputed total, winners/completed must agree"""
    snapshot = competition.snapshot()
    for team in snapshot.teams:
        assert team.points == compute_total(team, snapshot.challenges), team.id
        for challenge in snapshot.challenges:
            if challenge.disabled:
                assert challenge.id not in team.completed_challenges
            else:
                assert (team.id in challenge.winners) == (challenge.id in team.completed_challenges)
    for challenge in snapshot.challenges:
        if challenge.type.is_exclusive:
            assert len(challenge.winners) <= 1


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def competition(settings):
    return Competition(make_seed, settings=settings, rng=random.Random(42))


@pytest.fixture
def client(competition):
    app = create_app(competition=competition)
    with TestClient(app) as test_client:
        yield test_client
