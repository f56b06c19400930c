
import argparse

from aligner_harness import HarnessRun, ReferenceStore, TruthRecordReader, DEFAULT_MAX_READS, DEFAULT_PROGRESS_EVERY
from aligner_harness.aligners import MappyAligner
from aligner_harness.plots import plot_tier_counts, write_tier_counts


# Parse the command line
parser = argparse.ArgumentParser(description = """
aligner_test_harness.py

This script checks an aligner against a bam file of trusted alignments. Each read is
stripped of its alignment, realigned, and the candidate alignments are searched for one
at the same position and strand as the original. For reads with no such candidate the
read and reference are printed along the cigar of the original and of every candidate.

Prints a final line giving the number of reads examined, mismatches, and failures
(reads the aligner could not place at all).
""")
parser.add_argument('--bam', action = 'store', dest = 'bam', required = True, help = 'Bam file of trusted alignments')
parser.add_argument('--ref', action = 'store', dest = 'ref', required = True, help = 'Reference fasta file the bam file is aligned to')
parser.add_argument('--index', action = 'store', dest = 'index', required = False, help = 'Prebuilt minimap2 index of the reference. If omitted, build from the fasta file.')
parser.add_argument('--preset', action = 'store', dest = 'preset', required = False, default = 'sr', help = 'minimap2 preset')
parser.add_argument('--best_n', action = 'store', dest = 'best_n', required = False, default = 5, help = 'Max candidate alignments per read')
parser.add_argument('--max_reads', action = 'store', dest = 'max_reads', required = False, default = DEFAULT_MAX_READS, help = 'Max reads to examine. 0 for no limit.')
parser.add_argument('--progress_every', action = 'store', dest = 'progress_every', required = False, default = DEFAULT_PROGRESS_EVERY, help = 'Print a progress line every this many reads')
parser.add_argument('--read_name_suffix', action = 'store', dest = 'read_name_suffix', required = False, help = 'Comma-separated list of read name suffixes. If given, only examine reads ending with one of them.')
parser.add_argument('--strict_bases', action = 'store_true', dest = 'strict_bases', help = 'Skip reads with symbols outside the nucleotide alphabet')
parser.add_argument('--verbose', action = 'store_true', dest = 'verbose', help = 'Also print the matching alignment of each correctly aligned read')
parser.add_argument('--out_counts', action = 'store', dest = 'out_counts', required = False, help = 'Output table of matched reads per tier')
parser.add_argument('--out_fig', action = 'store', dest = 'out_fig', required = False, help = 'Output histogram of matched reads per tier')
parser.add_argument('--log', action = 'store', dest = 'log', required = True, help = 'Log file')
args = parser.parse_args()

# Simple args
bam_file = args.bam
ref_file = args.ref
index_file = args.index if args.index is not None else args.ref
out_counts = args.out_counts
out_fig = args.out_fig

# Process numeric args
best_n = int(args.best_n)
max_reads = int(args.max_reads)
if max_reads <= 0:
    max_reads = None
progress_every = int(args.progress_every)

# Process read name suffix arg
read_name_suffixes = None
if args.read_name_suffix is not None:
    read_name_suffixes = args.read_name_suffix.split(',')

# Process log arg
log = args.log
logger = open(log, "w", buffering = 1)

# Load the aligner
logger.write("\nLoading minimap2 index from %s...\n" % index_file)
aligner = MappyAligner(index_file, preset = args.preset, best_n = best_n)

# Iterate through the bam file and check every read against the aligner
logger.write("\nOpening reference %s and bam file %s...\n" % (ref_file, bam_file))
with ReferenceStore(ref_file) as reference, TruthRecordReader(bam_file) as records:
    logger.write("\nIterating through bam file and realigning reads...\n")
    harness = HarnessRun(aligner, reference,
                         logger = logger,
                         max_reads = max_reads,
                         progress_every = progress_every,
                         read_name_suffixes = read_name_suffixes,
                         strict_bases = args.strict_bases,
                         verbose = args.verbose)
    counts = harness.run(records)
    logger.write("Finished iterating through bam file. Skipped %s unmapped, secondary or supplementary records.\n" %
                 "{:,}".format(records.skipped))
logger.write("%s %s reads skipped.\n" % (counts.summary(), "{:,}".format(counts.skipped)))

# Write the tier counts to a table
if out_counts is not None:
    logger.write("\nWriting tier counts to file: %s...\n" % out_counts)
    write_tier_counts(counts.tier_counts, out_counts)

# Save histogram of tier counts
if out_fig is not None:
    logger.write("\nWriting histogram of tier counts to file: %s\n" % out_fig)
    plot_tier_counts(counts.tier_counts, out_fig, title = bam_file)

logger.write("\nAll done.\n\n")
logger.close()
