from aligner_harness.alignment import enumerate_candidates
from aligner_harness.errors import OutOfRange
from aligner_harness.padding import render_read, render_reference


def reference_window(reference, contig, start, read_length, cigar):
    """ Reference bases under an alignment starting at start.

    Deleted bases are in the reference but not the read, so the window is longer
    than the read by the deletion length of the cigar.
    """
    return reference.fetch(contig, start, start + read_length + cigar.deletion_length() - 1)


def _reference_row(reference, contig, start, read_length, cigar):
    try:
        return render_reference(reference_window(reference, contig, start, read_length, cigar), cigar)
    except OutOfRange as e:
        return "<unavailable: %s>" % e


def report(truth, reference, tiers, out):
    """ Print the truth alignment next to every candidate for manual inspection.

    Each block shows the read and the reference laid out along the same cigar, so
    matching columns line up vertically. A reference fetch that runs off its contig
    marks that row unavailable and reporting carries on.

    Args:
        truth: TruthRecord that no candidate matched
        reference: ReferenceStore
        tiers: Candidate tiers returned by the aligner
        out: Writable text stream

    Raises:
        CursorOverrun: A cigar does not fit the read
    """
    read_length = len(truth.bases)
    out.write("Error aligning read %s\n" % truth.name)
    out.write("read          = %s, position = %d, negative strand = %s\n" %
              (render_read(truth.bases, truth.cigar), truth.start, truth.negative_strand))
    out.write("expected ref  = %s\n" %
              _reference_row(reference, truth.contig, truth.start, read_length, truth.cigar))

    for tier_index, alignment in enumerate_candidates(tiers):
        out.write("\n")
        out.write("read          = %s\n" % render_read(truth.bases, alignment.cigar))
        out.write("actual ref    = %s, position = %d, negative strand = %s\n" %
                  (_reference_row(reference, alignment.contig, alignment.start, read_length, alignment.cigar),
                   alignment.start, alignment.negative_strand))
        out.write("candidate     = %s:%d %s, tier = %d, mismatches = %d, gap opens = %d, gap extensions = %d\n" %
                  (alignment.contig, alignment.start, alignment.cigar, tier_index,
                   alignment.mismatches, alignment.gap_opens, alignment.gap_extensions))
