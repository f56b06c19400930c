import collections

import pysam

from aligner_harness.cigar import Cigar


# A read together with the alignment it was previously given
# start is 1-based; bases are as stored in the bam file
TruthRecord = collections.namedtuple('TruthRecord', ['name', 'contig', 'start', 'negative_strand', 'cigar', 'bases'])


def truth_record(rec):
    """ Convert a pysam AlignedSegment into a TruthRecord. """
    return TruthRecord(name = rec.query_name,
                       contig = rec.reference_name,
                       start = rec.reference_start + 1,
                       negative_strand = rec.is_reverse,
                       cigar = Cigar.from_tuples(rec.cigartuples),
                       bases = rec.query_sequence)


class TruthRecordReader():
    def __init__(self, bam_file):
        """ Iterate over the truth alignments of a sam/bam file.

        Unmapped records and secondary or supplementary alignments carry no usable
        truth position, so they are skipped and counted.

        Args:
            bam_file: Path to sam/bam file
        """
        self.bam_file = bam_file
        self.skipped = 0
        self._reader = None

    def open(self):
        self._reader = pysam.AlignmentFile(self.bam_file, "r", check_sq = False)
        return self

    def close(self):
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.close()

    def __iter__(self):
        if self._reader is None:
            raise ValueError("Bam file is not open: %s" % self.bam_file)
        for rec in self._reader.fetch(until_eof = True):
            # Skip unmapped reads and secondary and supplementary (chimeric) alignments
            if rec.is_unmapped or rec.is_secondary or rec.is_supplementary \
                    or rec.query_sequence is None or rec.cigartuples is None:
                self.skipped = self.skipped + 1
                continue
            yield truth_record(rec)
