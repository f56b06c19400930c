from aligner_harness.cigar import cigar_deletion, cigar_insertion
from aligner_harness.errors import CursorOverrun

# Character written for columns of the blanked operation
BLANK = ' '


def render(source, cigar, blank_operation, blank = BLANK):
    """ Lay out a sequence along the columns of a cigar.

    Elements whose operation is blank_operation are written as blanks and do not
    consume the source; every other element consumes the next characters of the
    source in order. The result has one character per cigar column.

    Args:
        source: Bases to lay out (string)
        cigar: Cigar to walk
        blank_operation: The one operation whose columns have no source characters
        blank: Character written for blanked columns

    Raises:
        CursorOverrun: The cigar consumes more characters than the source holds
    """
    formatted = []
    read_index = 0
    for element in cigar:
        if element.operation is blank_operation:
            formatted.append(blank * element.length)
            continue
        end = read_index + element.length
        if end > len(source):
            raise CursorOverrun("Cigar %s needs at least %s characters but sequence has %s" %
                                (cigar, end, len(source)))
        formatted.append(source[read_index:end])
        read_index = end
    return "".join(formatted)


# Read bases: matches and insertions come from the read, deletions do not
def render_read(bases, cigar):
    return render(bases, cigar, cigar_deletion)


# Reference bases: matches and deletions come from the reference, insertions do not
def render_reference(reference_bases, cigar):
    return render(reference_bases, cigar, cigar_insertion)
