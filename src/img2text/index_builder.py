"""Builds total fragment-to-glyph lookup tables from glyph catalogs.

Exact catalog patterns are seeded first. The rest of the fragment space is
filled by two breadth-first passes: a dilation pass that only shrinks
fragments along their outline (so they resolve to thicker glyphs), followed by an unconditional pass that flips any single
bit and reaches every remaining fragment.
"""
import logging
from dataclasses import dataclass
from itertools import count
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

MAX_FRAGMENT_BITS = 32

_NEIGHBORS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class IndexBuildError(RuntimeError):
    """The mutation operators left part of the fragment space uncovered."""


@dataclass(frozen=True)
class IndexEntry:
    glyph_i: int
    distance: int


@dataclass(frozen=True)
class GlyphIndex:
    glyphs: Tuple[str, ...]
    distances: Tuple[int, ...]
    max_glyph_len: int


def decode_mask(mask: int, mask_dims: Sequence[int]) -> int:
    """Convert a visual-order pattern to the standard order.

    Catalog patterns are written so that their binary literal matches the
    visual layout. The standard order puts the upper left pixel in the least
    significant bit and the lower right pixel in the most significant bit.
    """
    num_bits = mask_dims[0] * mask_dims[1]
    out = 0
    for i in range(num_bits):
        if mask >> i & 1:
            out |= 1 << (num_bits - 1 - i)
    return out


def mutate_fragment_by_dilation(mask_dims: Sequence[int], frag: int) -> Iterator[int]:
    """Yield ``frag`` with one set pixel cleared where it borders a zero pixel.

    The derived fragment is thinner than the glyph it inherits, so looking it
    up later yields a thicker glyph and the rendered output ends up dilated.
    Zero pixels are never set.
    """
    w, h = mask_dims
    for y in range(h):
        for x in range(w):
            if frag >> (x + y * w) & 1:
                continue
            # copy this zero pixel to a neighboring set one
            for sx, sy in _NEIGHBORS:
                nx, ny = x + sx, y + sy
                if not (0 <= nx < w and 0 <= ny < h):
                    continue
                ni = nx + ny * w
                if not frag >> ni & 1:
                    continue
                yield frag & ~(1 << ni)


def mutate_fragment_unconditional(mask_dims: Sequence[int], frag: int) -> Iterator[int]:
    for i in range(mask_dims[0] * mask_dims[1]):
        yield frag ^ (1 << i)


Mutator = Callable[[Sequence[int], int], Iterator[int]]


def _sweep(index: List[Optional[IndexEntry]], mask_dims, base_distance: int,
           mutate: Mutator) -> bool:
    """Expand every entry at ``base_distance`` by one step.

    Returns whether any new entry was assigned.
    """
    num_bits = mask_dims[0] * mask_dims[1]
    progressed = False
    for mask, ent in enumerate(index):
        if ent is None or ent.distance != base_distance:
            # Unassigned, or already processed by a previous sweep
            continue
        for new_mask in mutate(mask_dims, mask):
            if index[new_mask] is not None:
                continue
            index[new_mask] = IndexEntry(ent.glyph_i, base_distance + 1)
            logger.debug("%s -> %s, %d", format(mask, '0%db' % num_bits),
                         format(new_mask, '0%db' % num_bits), base_distance + 1)
            progressed = True
    return progressed


def seed_index(masks: Sequence[int], num_bits: int) -> List[Optional[IndexEntry]]:
    """Create an index holding the exact matches.

    ``masks`` are catalog patterns in the standard order, listed by glyph
    index. If two glyphs share a pattern, the first one takes precedence.
    """
    if not 0 < num_bits <= MAX_FRAGMENT_BITS:
        raise ValueError(f"unsupported fragment size: {num_bits} bits")
    index: List[Optional[IndexEntry]] = [None] * (1 << num_bits)
    for glyph_i, mask in enumerate(masks):
        if index[mask] is None:
            index[mask] = IndexEntry(glyph_i, 0)
    return index


def expand_by_dilation(index: List[Optional[IndexEntry]], mask_dims) -> int:
    """Mutate known patterns to create lesser matches.

    Returns the last base distance at which anything was added.
    """
    last_distance = 0
    for base_distance in count():
        if not _sweep(index, mask_dims, base_distance, mutate_fragment_by_dilation):
            break
        last_distance = base_distance
    return last_distance


def expand_unconditionally(index: List[Optional[IndexEntry]], mask_dims, last_distance: int) -> None:
    """Fill what dilation couldn't reach by flipping single bits.

    Sweeping continues until a sweep adds nothing and the base distance is
    past ``last_distance``.
    """
    for base_distance in count():
        progressed = _sweep(index, mask_dims, base_distance, mutate_fragment_unconditional)
        if not progressed and base_distance > last_distance:
            break


def build_index_entries(masks: Sequence[int], mask_dims: Sequence[int]) -> List[IndexEntry]:
    """Assign an ``IndexEntry`` to every fragment of dimensions ``mask_dims``."""
    index = seed_index(masks, mask_dims[0] * mask_dims[1])
    last_distance = expand_by_dilation(index, mask_dims)
    expand_unconditionally(index, mask_dims, last_distance)

    missing = sum(1 for ent in index if ent is None)
    if missing:
        raise IndexBuildError(
            f"{missing} of {len(index)} fragments have no glyph for "
            f"mask dimensions {tuple(mask_dims)}"
        )
    return index


def build_index(glyphs: Sequence[Tuple[str, int]], mask_dims: Sequence[int]) -> GlyphIndex:
    """Build a dense lookup table from a catalog of ``(glyph, pattern)`` pairs.

    Patterns are given in visual order (see ``decode_mask``).
    """
    if not glyphs:
        raise ValueError("glyph catalog is empty")
    masks = [decode_mask(mask, mask_dims) for _, mask in glyphs]
    entries = build_index_entries(masks, mask_dims)
    return GlyphIndex(
        glyphs=tuple(glyphs[ent.glyph_i][0] for ent in entries),
        distances=tuple(ent.distance for ent in entries),
        max_glyph_len=max(len(glyph.encode('utf-8')) for glyph, _ in glyphs),
    )
