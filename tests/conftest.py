"""Shared pytest fixtures for catalog analytics tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from src.analytics.schemas import SourceRow

CSV_HEADER = (
    "show_id,type,title,director,cast,country,date_added,"
    "release_year,rating,duration,listed_in,description"
)


def make_row(**overrides) -> SourceRow:
    base = {
        "show_id": "s1",
        "type": "Movie",
        "title": "Dick Johnson Is Dead",
        "director": "Kirsten Johnson",
        "casts": None,
        "country": "United States",
        "date_added": None,
        "release_year": 2020,
        "rating": "PG-13",
        "duration": "90 min",
        "listed_in": "Documentaries",
        "description": "A filmmaker stages her father's death.",
    }
    base.update(overrides)
    return SourceRow(**base)


@pytest.fixture(autouse=True, scope="function")
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock env variables for reproducible tests."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_TO_FILE", "false")


@pytest.fixture
def row_factory() -> Callable[..., SourceRow]:
    """Builder for SourceRow with overridable defaults."""
    return make_row


@pytest.fixture
def catalog_rows() -> tuple[SourceRow, ...]:
    """Small catalog covering every query."""
    return (
        make_row(
            show_id="s1",
            type="Movie",
            title="Bajrangi Bhaijaan",
            director="Kabir Khan",
            casts="Salman Khan, Kareena Kapoor, Nawazuddin Siddiqui",
            country="India",
            date_added="2021-06-01",
            release_year=2015,
            rating="TV-14",
            duration="159 min",
            listed_in="Dramas, International Movies",
            description="A devotee helps a mute girl find her way home.",
        ),
        make_row(
            show_id="s2",
            type="Movie",
            title="Tubelight",
            director="Kabir Khan",
            casts="Salman Khan, Sohail Khan",
            country="India",
            date_added="2018-03-01",
            release_year=2017,
            rating="TV-14",
            duration="136 min",
            listed_in="Dramas, International Movies, Music & Musicals",
            description="A simple man waits for his brother to come back from war.",
        ),
        make_row(
            show_id="s3",
            type="Movie",
            title="Chhota Bheem Kung Fu Dhamaka",
            director="Rajiv Chilaka, Arun Shendurnikar",
            casts="Vatsal Dubey, Julie Tejwani",
            country="India, United States",
            date_added="2020-02-01",
            release_year=2019,
            rating="TV-Y7",
            duration="159 min",
            listed_in="Children & Family Movies",
            description="Bheem and friends fight to kill an evil plan.",
        ),
        make_row(
            show_id="s4",
            type="TV Show",
            title="Grey's Anatomy",
            director=None,
            casts="Ellen Pompeo, Sandra Oh",
            country="United States",
            date_added="2019-07-03",
            release_year=2018,
            rating="TV-14",
            duration="14 Seasons",
            listed_in="Romantic TV Shows, TV Dramas",
            description="Surgical interns navigate life and love.",
        ),
        make_row(
            show_id="s5",
            type="TV Show",
            title="Kota Factory",
            director=None,
            casts="Mayur More, Jitendra Kumar",
            country="India",
            date_added="2021-09-24",
            release_year=2021,
            rating="TV-MA",
            duration="2 Seasons",
            listed_in="International TV Shows, TV Comedies",
            description="Students grind for engineering entrance exams.",
        ),
        make_row(
            show_id="s6",
            type="Movie",
            title="My Octopus Teacher",
            director="Pippa Ehrlich, James Reed",
            casts=None,
            country="South Africa",
            date_added=None,
            release_year=2020,
            rating="TV-G",
            duration="85 min",
            listed_in="Documentaries, International Movies",
            description="A diver forms a bond with a wild octopus amid VIOLENCE of the sea.",
        ),
    )


@pytest.fixture
def catalog_csv(tmp_path: Path) -> Path:
    """Catalog CSV export with the raw Netflix layout."""
    content = "\n".join(
        [
            CSV_HEADER,
            's1,Movie,Dick Johnson Is Dead,Kirsten Johnson,,United States,"September 25, 2021",'
            "2020,PG-13,90 min,Documentaries,A filmmaker stages her father's death.",
            's2,TV Show,Blood & Water,,"Ama Qamata, Khosi Ngema","South Africa, ",'
            '" September 24, 2021",2021,TV-MA,2 Seasons,"International TV Shows, TV Dramas",'
            "A teen investigates a kill.",
            's3,Movie,Sankofa,Haile Gerima,"Kofi Ghanaba, Oyafunmike Ogunlano",'
            '"United States, Ghana, Burkina Faso",someday,1993,TV-MA,125 min,'
            '"Dramas, Independent Movies",An arrogant model is transported back in time.',
        ]
    )
    path = tmp_path / "netflix_titles.csv"
    path.write_text(content + "\n", encoding="utf-8")
    return path
