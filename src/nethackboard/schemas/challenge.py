# src/nethackboard/schemas/challenge.py

"""Pydantic schemas for the Challenge resource."""

from pydantic import BaseModel, ConfigDict, Field

# Character options offered by the filter dropdowns and the create form
ROLES = (
    "Archeologist",
    "Barbarian",
    "Caveman",
    "Healer",
    "Knight",
    "Monk",
    "Priest",
    "Ranger",
    "Rogue",
    "Samurai",
    "Tourist",
    "Valkyrie",
    "Wizard",
)
RACES = ("human", "elf", "dwarf", "gnome", "orc")
GENDERS = ("male", "female")
ALIGNMENTS = ("lawful", "neutral", "chaotic")

# ===============================================
# Read Schema: a challenge as the API returns it
# ===============================================


class Challenge(BaseModel):
    """A predefined game scenario (character build + seed).

    Timestamps are kept as the raw strings the API sends; the formatting
    helpers parse them leniently so one bad date cannot break a page.
    """

    challenge_id: str
    name: str | None = None
    description: str | None = None
    role: str | None = None
    race: str | None = None
    gender: str | None = None
    alignment: str | None = None
    created_at: str | None = None
    seed: str | int | None = None
    character_name: str | None = None

    model_config = ConfigDict(extra="ignore")


class ChallengeRow(Challenge):
    """A challenge merged with its best submission, if any.

    ``best_score`` and ``champion`` are both None for unclaimed challenges.
    """

    best_score: int | None = None
    champion: str | None = None

    @property
    def is_unclaimed(self) -> bool:
        return self.best_score is None


# ===============================================
# Create Schema: body of POST /challenges
# ===============================================


class ChallengeCreate(BaseModel):
    """Properties sent to the API when creating a challenge."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    role: str = Field(..., min_length=1)
    race: str = Field(..., min_length=1)
    gender: str = Field(..., min_length=1)
    alignment: str = Field(..., min_length=1)
    character_name: str = ""
