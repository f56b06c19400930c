import collections
import re

from aligner_harness.errors import MalformedCigar


class _CigarOperation():
    def __init__(self, op, bam, consumes_query, consumes_ref):
        """ Instantiate a cigar operation.

        Args:
            op: Operation (character e.g. 'M')
            bam: Numeric identifier e.g. 0 for 'M'
            consumes_query: Whether the operation consumes the query sequence (boolean)
            consumes_ref: Whether the operation consumes the reference sequence (boolean)
        """
        self.op = op
        self.bam = bam
        self.consumes_query = consumes_query
        self.consumes_ref = consumes_ref

    def __repr__(self):
        return "CigarOperation(%s)" % self.op

# The cigar operations
cigar_align_match = _CigarOperation('M', 0, True, True)
cigar_insertion = _CigarOperation('I', 1, True, False)
cigar_deletion = _CigarOperation('D', 2, False, True)
cigar_skip = _CigarOperation('N', 3, False, True)
cigar_soft_clip = _CigarOperation('S', 4, True, False)
cigar_hard_clip = _CigarOperation('H', 5, False, False)
cigar_pad = _CigarOperation('P', 6, False, False)
cigar_seq_match = _CigarOperation('=', 7, True, True)
cigar_seq_mismatch = _CigarOperation('X', 8, True, True)

# List of cigar operations
cigar_ops = [cigar_align_match,
                  cigar_insertion,
                  cigar_deletion,
                  cigar_skip,
                  cigar_soft_clip,
                  cigar_hard_clip,
                  cigar_pad,
                  cigar_seq_match,
                  cigar_seq_mismatch]

# Map of bam number to cigar operation
bam_to_cigar_element = {elt.bam: elt for elt in cigar_ops}

# Map of character to cigar operation
op_to_cigar_element = {elt.op: elt for elt in cigar_ops}

# Map of bam number to whether the operation consumes reference / query sequence
bam_to_consumes_ref = {elt.bam: elt.consumes_ref for elt in cigar_ops}
bam_to_consumes_query = {elt.bam: elt.consumes_query for elt in cigar_ops}

# Operations that open or extend a gap
_gap_ops = (cigar_insertion, cigar_deletion)

# One length/operation pair of a cigar string
_cigar_string_element = re.compile(r"(\d+)(\D)")
_cigar_string_full = re.compile(r"^(\d+\D)+$")


def _check_tuple(cigar_tuple):
    if len(cigar_tuple) != 2:
        raise MalformedCigar("Invalid cigar tuple: %s" % (cigar_tuple,))
    if cigar_tuple[0] not in bam_to_cigar_element:
        raise MalformedCigar("Unknown cigar operation code: %s" % cigar_tuple[0])

# Amount of reference sequence consumed by a cigar element
def ref_consumed(cigar_tuple):
    _check_tuple(cigar_tuple)
    if bam_to_consumes_ref[cigar_tuple[0]]:
        return cigar_tuple[1]
    else:
        return 0

# Amount of query sequence consumed by a cigar element
def query_consumed(cigar_tuple):
    _check_tuple(cigar_tuple)
    if bam_to_consumes_query[cigar_tuple[0]]:
        return cigar_tuple[1]
    else:
        return 0

# Total amount of reference sequence consumed by a list of cigar tuples
# Tuples are (bam, length)
def cigar_span(cigar_tuples):
    return sum(map(ref_consumed, cigar_tuples))

# Total amount of query sequence consumed by a list of cigar tuples
def query_span(cigar_tuples):
    return sum(map(query_consumed, cigar_tuples))


class CigarElement(collections.namedtuple('CigarElement', ['operation', 'length'])):
    """ One run of a single cigar operation. """
    __slots__ = ()

    def __new__(cls, operation, length):
        if operation not in cigar_ops:
            raise MalformedCigar("Unknown cigar operation: %s" % (operation,))
        if length <= 0:
            raise MalformedCigar("Cigar element length must be positive: %s%s" % (length, operation.op))
        return super(CigarElement, cls).__new__(cls, operation, length)

    def as_tuple(self):
        return (self.operation.bam, self.length)

    def __str__(self):
        return "%s%s" % (self.length, self.operation.op)


class Cigar():
    """ Immutable, ordered sequence of cigar elements.

    Elements are kept in the order they appear in the cigar string, which is
    significant: the padding engine walks them left to right.
    """
    __slots__ = ('_elements',)

    def __init__(self, elements):
        self._elements = tuple(elements)
        for element in self._elements:
            if not isinstance(element, CigarElement):
                raise MalformedCigar("Not a cigar element: %s" % (element,))

    @classmethod
    def from_string(cls, cigar_string):
        """ Parse a SAM cigar string such as '5M2D3M'. """
        if cigar_string is None or not _cigar_string_full.match(cigar_string):
            raise MalformedCigar("Invalid cigar string: %s" % cigar_string)
        elements = []
        for length, op in _cigar_string_element.findall(cigar_string):
            if op not in op_to_cigar_element:
                raise MalformedCigar("Unknown cigar operation: %s" % op)
            elements.append(CigarElement(op_to_cigar_element[op], int(length)))
        return cls(elements)

    @classmethod
    def from_tuples(cls, cigar_tuples):
        """ Build a cigar from (bam, length) tuples as given by pysam cigartuples. """
        elements = []
        for cigar_tuple in cigar_tuples:
            _check_tuple(cigar_tuple)
            elements.append(CigarElement(bam_to_cigar_element[cigar_tuple[0]], cigar_tuple[1]))
        return cls(elements)

    @property
    def elements(self):
        return self._elements

    def as_tuples(self):
        return [element.as_tuple() for element in self._elements]

    def query_length(self):
        return query_span(self.as_tuples())

    def reference_length(self):
        return cigar_span(self.as_tuples())

    def operation_length(self, operation):
        return sum(element.length for element in self._elements if element.operation is operation)

    def deletion_length(self):
        return self.operation_length(cigar_deletion)

    def column_count(self):
        return sum(element.length for element in self._elements)

    def gap_opens(self):
        return sum(1 for element in self._elements if element.operation in _gap_ops)

    def gap_extensions(self):
        return sum(element.length - 1 for element in self._elements if element.operation in _gap_ops)

    def __iter__(self):
        return iter(self._elements)

    def __len__(self):
        return len(self._elements)

    def __eq__(self, other):
        return isinstance(other, Cigar) and self._elements == other._elements

    def __hash__(self):
        return hash(self._elements)

    def __str__(self):
        return "".join(map(str, self._elements))

    def __repr__(self):
        return "Cigar(%s)" % str(self)
