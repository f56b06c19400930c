import collections
import io
import sys

from aligner_harness.alignment import select
from aligner_harness.errors import AlignmentFailure, CursorOverrun, InvalidBase
from aligner_harness.normalize import normalize
from aligner_harness.report import report

# Defaults for the command line
DEFAULT_MAX_READS = 200000
DEFAULT_PROGRESS_EVERY = 1000


class RunCounts():
    def __init__(self):
        """ Counters accumulated over a run.

        count: Reads examined
        mismatches: Reads with candidates but none at the truth position and strand
        failures: Reads the aligner returned nothing for
        skipped: Reads abandoned because their bases or cigar were unusable
        tier_counts: Number of matched reads per tier index of the selected candidate
        """
        self.count = 0
        self.mismatches = 0
        self.failures = 0
        self.skipped = 0
        self.tier_counts = collections.Counter()

    def merge(self, other):
        self.count += other.count
        self.mismatches += other.mismatches
        self.failures += other.failures
        self.skipped += other.skipped
        self.tier_counts.update(other.tier_counts)
        return self

    def summary(self):
        return "%d reads examined; %d mismatches; %d failures." % (self.count, self.mismatches, self.failures)


class _NullLogger():
    def write(self, s):
        pass


class HarnessRun():
    def __init__(self, aligner, reference, out = None, logger = None,
                 max_reads = DEFAULT_MAX_READS, progress_every = DEFAULT_PROGRESS_EVERY,
                 read_name_suffixes = None, strict_bases = False, verbose = False):
        """ Check an aligner against truth alignments one read at a time.

        Args:
            aligner: Aligner producing candidate tiers
            reference: Open ReferenceStore used for diagnostics
            out: Stream for diagnostics, progress, and the summary (default stdout)
            logger: Writable log file (optional)
            max_reads: Stop after examining this many reads (None for no limit)
            progress_every: Print a progress line every this many reads
            read_name_suffixes: Only examine reads whose names end with one of these
            strict_bases: Skip reads containing symbols outside the nucleotide alphabet
            verbose: Also print the selected alignment of reads that match
        """
        self.aligner = aligner
        self.reference = reference
        self.out = out if out is not None else sys.stdout
        self.logger = logger if logger is not None else _NullLogger()
        self.max_reads = max_reads
        self.progress_every = progress_every
        self.read_name_suffixes = tuple(read_name_suffixes) if read_name_suffixes else None
        self.strict_bases = strict_bases
        self.verbose = verbose
        self.counts = RunCounts()

    def wanted(self, rec):
        if self.read_name_suffixes is None:
            return True
        return rec.name.endswith(self.read_name_suffixes)

    def examine(self, rec):
        """ Normalize, align, and select for one truth record, updating the counts. """
        counts = self.counts
        counts.count = counts.count + 1

        try:
            query = normalize(rec, strict = self.strict_bases)
        except InvalidBase as e:
            self.logger.write("Skipping read %s: %s\n" % (rec.name, e))
            counts.skipped = counts.skipped + 1
            return

        try:
            result = select(self.aligner, query, rec)
        except AlignmentFailure:
            self.out.write("Unable to align read %s to reference; count = %d\n" % (rec.name, counts.count))
            counts.failures = counts.failures + 1
            return

        if result.selection is not None:
            found = result.selection.alignment
            counts.tier_counts[result.selection.tier] += 1
            if self.verbose:
                self.out.write("%s: Aligned read to reference at position %d with %d mismatches, %d gap opens, and %d gap extensions.\n" %
                               (rec.name, found.start, found.mismatches, found.gap_opens, found.gap_extensions))
            return

        counts.mismatches = counts.mismatches + 1
        # Build the whole block first so a bad cigar does not leave half of it in the output
        block = io.StringIO()
        try:
            report(rec, self.reference, result.tiers, block)
        except CursorOverrun as e:
            self.logger.write("Skipping diagnostics for read %s: %s\n" % (rec.name, e))
            counts.skipped = counts.skipped + 1
            return
        self.out.write(block.getvalue())

    def run(self, records):
        """ Examine records until they run out or max_reads is reached.

        MalformedCigar is not caught: a corrupt cigar aborts the whole run.

        Returns:
            RunCounts
        """
        counts = self.counts
        for rec in records:
            if self.max_reads is not None and counts.count >= self.max_reads:
                self.logger.write("Stopping after %s reads.\n" % "{:,}".format(counts.count))
                break
            if not self.wanted(rec):
                continue
            self.examine(rec)
            if self.progress_every and counts.count % self.progress_every == 0:
                self.out.write("%d reads examined.\n" % counts.count)
                self.logger.write("Finished %s reads. %s mismatches, %s failures, %s skipped.\n" %
                                  ("{:,}".format(counts.count), "{:,}".format(counts.mismatches),
                                   "{:,}".format(counts.failures), "{:,}".format(counts.skipped)))
        self.out.write("%s\n" % counts.summary())
        return counts
