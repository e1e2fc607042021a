"""Data models for edit proposals.

A Proposal is the presentable record of one edit directive. ProposalSet is
the authoritative, first-seen-ordered collection the session publishes.
Both are immutable: every mutation returns a new value, so snapshots handed
to a presentation layer never change underneath it.
"""

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field


class Proposal(BaseModel):
    """A single proposed old-text to new-text edit."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Opaque identifier, unique within a conversation")
    original_text: str = Field(description="Text the edit replaces")
    suggested_text: str = Field(description="Replacement text")
    accepted: bool = Field(default=False, description="Set only by an explicit accept action")


class ProposalSet:
    """Mapping of proposal id to Proposal with stable first-seen order."""

    def __init__(self, proposals: Iterable[Proposal] | None = None):
        self._items: dict[str, Proposal] = {}
        for proposal in proposals or ():
            self._items[proposal.id] = proposal

    def merge(self, incoming: Iterable[Proposal]) -> "ProposalSet":
        """Merge freshly extracted proposals.

        Unknown ids are appended with accepted=False. Known ids keep their
        position and their accepted flag; only the text fields change.

        Args:
            incoming: Proposals from the extractor

        Returns:
            New ProposalSet
        """
        items = dict(self._items)
        for proposal in incoming:
            existing = items.get(proposal.id)
            items[proposal.id] = Proposal(
                id=proposal.id,
                original_text=proposal.original_text,
                suggested_text=proposal.suggested_text,
                accepted=existing.accepted if existing is not None else False,
            )
        return ProposalSet(items.values())

    def accept(self, proposal_id: str) -> "ProposalSet":
        """Mark one proposal accepted. Unknown ids are ignored."""
        existing = self._items.get(proposal_id)
        if existing is None or existing.accepted:
            return self
        items = dict(self._items)
        items[proposal_id] = existing.model_copy(update={"accepted": True})
        return ProposalSet(items.values())

    def reject(self, proposal_id: str) -> "ProposalSet":
        """Remove one proposal entirely. Unknown ids are ignored."""
        if proposal_id not in self._items:
            return self
        return ProposalSet(p for p in self._items.values() if p.id != proposal_id)

    def get(self, proposal_id: str) -> Proposal | None:
        """Get a proposal by id."""
        return self._items.get(proposal_id)

    @property
    def ids(self) -> list[str]:
        """Proposal ids in first-seen order."""
        return list(self._items)

    def to_list(self) -> list[Proposal]:
        """Snapshot of the proposals in first-seen order."""
        return list(self._items.values())

    def __iter__(self) -> Iterator[Proposal]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, proposal_id: object) -> bool:
        return proposal_id in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProposalSet):
            return NotImplemented
        return self.to_list() == other.to_list()

    def __repr__(self) -> str:
        return f"ProposalSet({self.to_list()!r})"
