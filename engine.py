# engine.py

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple


class InvalidInputError(ValueError):
    """Raised when a simulation cannot be run on the given input."""


class ReplacementPolicy:
    """
    Available page replacement algorithms.

    FIFO: replaces the page that entered memory earliest (round-robin slots)
    LRU:  replaces the page not used for the longest time
    MRU:  replaces the page used most recently
    OPT:  replaces the page whose next use lies furthest in the future
    """
    FIFO = "FIFO"
    LRU = "LRU"
    MRU = "MRU"
    OPT = "OPT"

    ALL = (FIFO, LRU, OPT, MRU)

    LABELS = {
        FIFO: "First-In-First-Out (FIFO)",
        LRU: "Least Recently Used (LRU)",
        OPT: "Optimal (OPT)",
        MRU: "Most Recently Used (MRU)",
    }


@dataclass(frozen=True)
class Step:
    """
    One processed reference.

    Attributes:
        index (int): Position of the reference in the input sequence
        page (int): The referenced page
        frames (Tuple[Optional[int], ...]): Frame contents after this step
        fault (bool): True on a page fault, False on a hit
        replaced (Optional[int]): Evicted page, None when nothing was evicted
        slot (int): Frame slot holding the page after this step
        pointer (Optional[int]): FIFO replacement pointer after this step
        recency (Optional[Tuple[int, ...]]): LRU/MRU order, oldest first
    """
    index: int
    page: int
    frames: Tuple[Optional[int], ...]
    fault: bool
    replaced: Optional[int] = None
    slot: int = 0
    pointer: Optional[int] = None
    recency: Optional[Tuple[int, ...]] = None

    @property
    def hit(self) -> bool:
        return not self.fault


@dataclass(frozen=True)
class SimulationResult:
    policy: str
    frame_count: int
    references: Tuple[int, ...]
    steps: Tuple[Step, ...]
    fault_count: int
    hit_count: int
    event_log: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_references(self) -> int:
        return len(self.references)

    @property
    def hit_ratio(self) -> float:
        if self.total_references == 0:
            return 0.0
        return self.hit_count / self.total_references

    @property
    def fault_ratio(self) -> float:
        if self.total_references == 0:
            return 0.0
        return self.fault_count / self.total_references

    @property
    def rounded_hit_ratio(self) -> float:
        return round(self.hit_ratio, 2)


# -----------------------------
# Victim Selectors
# -----------------------------
class VictimSelector:
    """
    Eviction strategy plugged into the shared step loop.

    The loop reports every hit (touch), every placed page (loaded) and
    every eviction (evicted); select_victim is only called on a fault
    when all frames are occupied.
    """

    def touch(self, page: int) -> None:
        pass

    def loaded(self, page: int, slot: int) -> None:
        pass

    def evicted(self, page: int) -> None:
        pass

    def select_victim(self, frames: List[Optional[int]], position: int,
                      references: Sequence[int]) -> int:
        raise NotImplementedError

    @property
    def pointer(self) -> Optional[int]:
        return None

    @property
    def recency(self) -> Optional[Tuple[int, ...]]:
        return None


class FIFOSelector(VictimSelector):
    def __init__(self, frame_count: int):
        self.frame_count = frame_count
        self._pointer = 0

    def loaded(self, page, slot):
        self._pointer = (slot + 1) % self.frame_count

    def select_victim(self, frames, position, references):
        return self._pointer

    @property
    def pointer(self):
        return self._pointer


class LRUSelector(VictimSelector):
    """Evicts the front of the recency track (least recently used)."""

    def __init__(self):
        self.track: List[int] = []

    def touch(self, page):
        self.track.remove(page)
        self.track.append(page)

    def loaded(self, page, slot):
        self.track.append(page)

    def evicted(self, page):
        self.track.remove(page)

    def _candidate(self) -> int:
        return self.track[0]

    def select_victim(self, frames, position, references):
        return frames.index(self._candidate())

    @property
    def recency(self):
        return tuple(self.track)


class MRUSelector(LRUSelector):
    """Same recency track as LRU, evicting from the most recent end."""

    def _candidate(self) -> int:
        return self.track[-1]


class OptimalSelector(VictimSelector):
    """Evicts the page whose next use is furthest away (or never comes)."""

    def select_victim(self, frames, position, references):
        victim = 0
        furthest = -1.0
        for slot, page in enumerate(frames):
            next_use = _next_use(references, page, position + 1)
            # strict comparison keeps the lowest slot on ties
            if next_use > furthest:
                victim = slot
                furthest = next_use
        return victim


def _next_use(references: Sequence[int], page: int, start: int) -> float:
    for i in range(start, len(references)):
        if references[i] == page:
            return float(i)
    return float('inf')


def make_selector(policy: str, frame_count: int) -> VictimSelector:
    if policy == ReplacementPolicy.FIFO:
        return FIFOSelector(frame_count)
    elif policy == ReplacementPolicy.LRU:
        return LRUSelector()
    elif policy == ReplacementPolicy.MRU:
        return MRUSelector()
    elif policy == ReplacementPolicy.OPT:
        return OptimalSelector()
    raise InvalidInputError(f"Unknown replacement policy: {policy!r}")


# -----------------------------
# Validation
# -----------------------------
def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_inputs(references: Sequence[int], frame_count: int) -> None:
    if not _is_int(frame_count) or frame_count < 1:
        raise InvalidInputError(f"Frame count must be a positive integer, got {frame_count!r}")
    if len(references) == 0:
        raise InvalidInputError("Reference sequence cannot be empty")
    for ref in references:
        if not _is_int(ref) or ref < 0:
            raise InvalidInputError(f"Page references must be non-negative integers, got {ref!r}")


# -----------------------------
# Simulation
# -----------------------------
def simulate(references: Iterable[int], frame_count: int, policy: str) -> SimulationResult:
    """
    Run one replacement policy over a reference sequence.

    Every reference produces exactly one Step, in input order. Empty frames
    are always filled (lowest slot first) before the policy is asked for a
    victim.

    Raises:
        InvalidInputError: empty sequence, bad frame count, bad reference
            or unknown policy. No partial result is produced.
    """
    refs = tuple(references)
    validate_inputs(refs, frame_count)
    selector = make_selector(policy, frame_count)

    frames: List[Optional[int]] = [None] * frame_count
    steps: List[Step] = []
    event_log: List[str] = []
    faults = 0
    hits = 0

    for position, page in enumerate(refs):
        replaced = None

        # ----- PAGE HIT -----
        if page in frames:
            hits += 1
            slot = frames.index(page)
            selector.touch(page)
            event_log.append(f"Hit: Page {page} in Frame {slot}")
            steps.append(_snapshot(position, page, frames, False, None, slot, selector))
            continue

        # ----- PAGE FAULT -----
        faults += 1
        event_log.append(f"Fault: Page {page} not in memory")

        if None in frames:
            slot = frames.index(None)
        else:
            slot = selector.select_victim(frames, position, refs)
            replaced = frames[slot]
            selector.evicted(replaced)
            event_log.append(f"Evicting: Page {replaced} from Frame {slot}")

        frames[slot] = page
        selector.loaded(page, slot)
        event_log.append(f"Loaded: Page {page} -> Frame {slot}")
        steps.append(_snapshot(position, page, frames, True, replaced, slot, selector))

    return SimulationResult(
        policy=policy,
        frame_count=frame_count,
        references=refs,
        steps=tuple(steps),
        fault_count=faults,
        hit_count=hits,
        event_log=tuple(event_log),
    )


def _snapshot(position, page, frames, fault, replaced, slot, selector) -> Step:
    return Step(
        index=position,
        page=page,
        frames=tuple(frames),
        fault=fault,
        replaced=replaced,
        slot=slot,
        pointer=selector.pointer,
        recency=selector.recency,
    )


# -----------------------------
# Comparison helpers
# -----------------------------
def compare_policies(references: Sequence[int], frame_count: int,
                     policies: Sequence[str] = ReplacementPolicy.ALL) -> Dict[str, SimulationResult]:
    """Run several policies over the same input, one independent run each."""
    refs = tuple(references)
    return {policy: simulate(refs, frame_count, policy) for policy in policies}


def fault_curve(references: Sequence[int], policy: str, max_frames: int) -> List[Tuple[int, int]]:
    """
    Fault count for every frame count from 1 to max_frames.

    FIFO curves may rise as frames are added (Belady's anomaly).
    """
    if not _is_int(max_frames) or max_frames < 1:
        raise InvalidInputError(f"max_frames must be a positive integer, got {max_frames!r}")
    refs = tuple(references)
    return [(n, simulate(refs, n, policy).fault_count) for n in range(1, max_frames + 1)]
