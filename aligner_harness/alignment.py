import collections

from aligner_harness.errors import AlignmentFailure


# One candidate alignment produced by an aligner; start is 1-based
Alignment = collections.namedtuple('Alignment', ['contig', 'start', 'negative_strand', 'cigar',
                                                 'mismatches', 'gap_opens', 'gap_extensions'])

# The matching candidate and the index of the tier it was found in
Selection = collections.namedtuple('Selection', ['tier', 'alignment'])

# Everything the aligner returned for a query, and the selection made from it
# selection is None when no candidate matches the truth
SelectionResult = collections.namedtuple('SelectionResult', ['tiers', 'selection'])


def enumerate_candidates(tiers):
    """ Flatten alignment tiers into (tier index, alignment) pairs, best tier first. """
    for tier_index, tier in enumerate(tiers):
        for alignment in tier:
            yield tier_index, alignment


def matches_truth(alignment, truth):
    return alignment.negative_strand == truth.negative_strand and alignment.start == truth.start


def select_candidate(tiers, truth):
    """ Find the candidate alignment placed where the truth record is.

    Every candidate is examined and the last match in enumeration order is the one
    returned, so a match in a worse tier replaces a match in a better one.

    Args:
        tiers: Sequence of tiers, each a collection of Alignment
        truth: TruthRecord giving the expected start and strand

    Returns:
        Selection, or None if no candidate matches

    Raises:
        AlignmentFailure: There are no tiers at all
    """
    if len(tiers) == 0:
        raise AlignmentFailure("Unable to align read %s to reference" % truth.name)
    found = None
    for tier_index, alignment in enumerate_candidates(tiers):
        if matches_truth(alignment, truth):
            found = Selection(tier_index, alignment)
    return found


def select(aligner, query, truth):
    """ Align a normalized query and select the candidate agreeing with the truth.

    The aligner is called exactly once. Its tiers are copied into lists, since the
    aligner may hand back a single-use iterable and the reporter walks them again.

    Raises:
        AlignmentFailure: The aligner returned no tiers
    """
    tiers = [list(tier) for tier in aligner.get_all_alignments(query)]
    return SelectionResult(tiers, select_candidate(tiers, truth))
