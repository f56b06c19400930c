from aligner_harness.cigar import (Cigar, CigarElement, cigar_span, query_span, ref_consumed, query_consumed,
                                   cigar_align_match, cigar_insertion, cigar_deletion, cigar_skip,
                                   cigar_soft_clip, cigar_hard_clip, cigar_pad, cigar_seq_match,
                                   cigar_seq_mismatch, cigar_ops)
from aligner_harness.errors import (HarnessError, MalformedCigar, CursorOverrun, InvalidBase, OutOfRange,
                                    AlignmentFailure)
from aligner_harness.padding import render, render_read, render_reference
from aligner_harness.normalize import normalize, reverse_complement
from aligner_harness.alignment import (Alignment, Selection, SelectionResult, enumerate_candidates,
                                       matches_truth, select_candidate, select)
from aligner_harness.records import TruthRecord, TruthRecordReader, truth_record
from aligner_harness.reference import ReferenceStore
from aligner_harness.report import report, reference_window
from aligner_harness.driver import HarnessRun, RunCounts, DEFAULT_MAX_READS, DEFAULT_PROGRESS_EVERY
