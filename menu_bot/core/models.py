"""Configuration tree models for the menu bot.

The models are implemented using :mod:`pydantic` so that the decoded
``config.json`` is validated once at startup.  The compiler trusts these
objects and performs no validation of its own.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Member(_Node):
    """A team member or community mentor.

    Attributes
    ----------
    name:
        Given name.
    surname:
        Family name; rendered before the given name on pages.
    skills:
        Free-form skill tag shown below the member line.
    link:
        Contact link (usually a chat handle or profile URL).
    phone:
        Optional phone number.

    """

    name: str
    surname: str
    skills: str = ""
    link: str = ""
    phone: str = ""


class Link(_Node):
    """A labelled value, used for sprint rows and event links."""

    title: str
    value: str = ""


class Team(_Node):
    name: str
    rows: list[str] = Field(default_factory=list)
    members: list[Member] = Field(default_factory=list)


class Sprint(_Node):
    """A sprint page keyed by its date.

    Older configuration files describe the per-team goals as a ``teams``
    mapping; it is accepted and converted to ordered rows.
    """

    date: str
    goal: str = ""
    rows: list[Link] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _teams_to_rows(cls, data: object) -> object:
        if isinstance(data, dict) and "teams" in data and "rows" not in data:
            data = dict(data)
            teams = data.pop("teams") or {}
            data["rows"] = [{"title": k, "value": v} for k, v in teams.items()]
        return data


class Community(_Node):
    name: str
    rows: list[str] = Field(default_factory=list)
    mentors: list[Member] = Field(default_factory=list)


class Event(_Node):
    title: str
    date: str = ""
    info: str = ""
    links: list[Link] = Field(default_factory=list)

    @property
    def key(self) -> str:
        """Routing key of the event: its title followed by its date."""
        return f"{self.title} {self.date}"


class EventsGroup(_Node):
    title: str
    info: str = ""
    rows: list[str] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list, alias="items")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Record(_Node):
    """An artifact entry: a title and free-text rows."""

    title: str
    rows: list[str] = Field(default_factory=list)


class MenuConfig(_Node):
    """Root of the configuration tree.

    The three chat messages are required.  A category is *enumerated* when
    its ``*_button_title`` is set; only enumerated categories appear on the
    home keyboard.
    """

    welcome: str = Field(min_length=1)
    auth_msg: str = Field(min_length=1)
    authorized: str = Field(min_length=1)

    teams_button_title: str | None = None
    sprint_button_title: str | None = None
    communities_button_title: str | None = None
    events_button_title: str | None = None
    artifacts_button_title: str | None = None

    teams_info: str | None = None
    communities_info: str | None = None
    events_info: str | None = None
    artifacts_info: str | None = None
    mentors_title: str = ""

    teams: list[Team] = Field(default_factory=list)
    sprints: list[Sprint] = Field(default_factory=list)
    communities: list[Community] = Field(default_factory=list)
    events: list[EventsGroup] = Field(default_factory=list)
    artifacts: list[Record] = Field(default_factory=list)
