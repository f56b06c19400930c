import itertools

import mappy

from aligner_harness.alignment import Alignment
from aligner_harness.cigar import Cigar, cigar_soft_clip


class Aligner():
    """ Produces ranked candidate alignments for a read. """

    def get_all_alignments(self, bases):
        """ Align bases to the reference.

        Args:
            bases: Forward strand read bases (string)

        Returns:
            Iterable of tiers ordered best to worst. Each tier is a collection of
            Alignment with equal rank and no particular order.
        """
        raise NotImplementedError


def hit_cigar(hit, query_length):
    """ Cigar of a mappy hit covering the whole query.

    mappy leaves the unaligned ends of the query out of the cigar; they are added
    back as soft clips. On the reverse strand the query is reverse complemented, so
    the clipped lengths swap ends.
    """
    left_clip = hit.q_st
    right_clip = query_length - hit.q_en
    if hit.strand == -1:
        left_clip, right_clip = right_clip, left_clip
    # mappy cigar entries are [length, bam]
    cigar_tuples = [(op, length) for length, op in hit.cigar]
    if left_clip > 0:
        cigar_tuples.insert(0, (cigar_soft_clip.bam, left_clip))
    if right_clip > 0:
        cigar_tuples.append((cigar_soft_clip.bam, right_clip))
    return Cigar.from_tuples(cigar_tuples)


def hit_to_alignment(hit, query_length):
    cigar = hit_cigar(hit, query_length)
    indel_bases = cigar.gap_opens() + cigar.gap_extensions()
    return Alignment(contig = hit.ctg,
                     start = hit.r_st + 1,
                     negative_strand = hit.strand == -1,
                     cigar = cigar,
                     mismatches = max(hit.NM - indel_bases, 0),
                     gap_opens = cigar.gap_opens(),
                     gap_extensions = cigar.gap_extensions())


class MappyAligner(Aligner):
    def __init__(self, fasta_file, preset = "sr", best_n = 5):
        """ Candidate alignments from minimap2 through mappy.

        All hits for a read are reported, grouped into tiers of equal edit distance.

        Args:
            fasta_file: Reference fasta file or prebuilt minimap2 index
            preset: minimap2 preset e.g. 'sr' for short reads
            best_n: Maximum number of hits to report per read
        """
        self._aligner = mappy.Aligner(fasta_file, preset = preset, best_n = best_n)
        if not self._aligner:
            raise ValueError("Failed to load or build index for %s" % fasta_file)

    def get_all_alignments(self, bases):
        hits = sorted(self._aligner.map(bases), key = lambda hit: hit.NM)
        return [[hit_to_alignment(hit, len(bases)) for hit in tier]
                for _, tier in itertools.groupby(hits, key = lambda hit: hit.NM)]
