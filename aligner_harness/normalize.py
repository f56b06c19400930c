from aligner_harness.errors import InvalidBase

# Nucleotide complements including IUPAC ambiguity codes, both cases
_complement = str.maketrans(
    'ACGTRYSWKMBDHVNacgtryswkmbdhvn',
    'TGCAYRSWMKVHDBNtgcayrswmkvhdbn'
)

# Symbols accepted when normalizing in strict mode
nucleotide_alphabet = frozenset('ACGTRYSWKMBDHVNacgtryswkmbdhvn')


def reverse_complement(bases):
    """ Reverse complement a base string, leaving unknown symbols unchanged. """
    return bases.translate(_complement)[::-1]


def check_bases(bases):
    for i, base in enumerate(bases):
        if base not in nucleotide_alphabet:
            raise InvalidBase("Invalid base '%s' at read offset %s" % (base, i))


def normalize(truth, strict = False):
    """ Recover the read as it came off the sequencer.

    Reads aligned to the negative strand are stored reverse complemented, so those
    are flipped back. Only the bases are returned: the position, strand, and cigar
    of the truth record are not carried over.

    Args:
        truth: TruthRecord to normalize
        strict: Raise InvalidBase on symbols outside the nucleotide alphabet instead
            of passing them through
    """
    bases = truth.bases
    if strict:
        check_bases(bases)
    if truth.negative_strand:
        return reverse_complement(bases)
    return bases
