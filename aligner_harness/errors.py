
class HarnessError(ValueError):
    """ Base class for errors raised by the aligner test harness. """


class MalformedCigar(HarnessError):
    """ A cigar element has a non-positive length or an unknown operation. """


class CursorOverrun(HarnessError):
    """ A cigar asks for more characters than the source sequence holds. """


class InvalidBase(HarnessError):
    """ A read contains a symbol outside the nucleotide alphabet. """


class OutOfRange(HarnessError):
    """ A reference fetch falls outside the bounds of its contig. """


class AlignmentFailure(HarnessError):
    """ The aligner returned no candidate alignments for a read. """
