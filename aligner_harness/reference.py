import pysam

from aligner_harness.errors import OutOfRange


class ReferenceStore():
    def __init__(self, fasta_file):
        """ Random access to an indexed fasta file using 1-based inclusive coordinates.

        The index is built by pysam if it does not exist yet. Open once per run and
        pass the store to whatever needs reference bases.

        Args:
            fasta_file: Path to fasta file
        """
        self.fasta_file = fasta_file
        self._fasta = None

    def open(self):
        self._fasta = pysam.FastaFile(self.fasta_file)
        return self

    def close(self):
        if self._fasta is not None:
            self._fasta.close()
            self._fasta = None

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.close()

    @property
    def contigs(self):
        return list(self._fasta.references)

    def contig_length(self, contig):
        if contig not in self._fasta.references:
            raise OutOfRange("Unknown contig: %s" % contig)
        return self._fasta.get_reference_length(contig)

    def fetch(self, contig, start, end):
        """ Bases of contig from start to end, both 1-based and inclusive. """
        length = self.contig_length(contig)
        if start < 1 or end < start or end > length:
            raise OutOfRange("Interval %s:%s-%s is outside contig of length %s" % (contig, start, end, length))
        # pysam coordinates are 0-based half open
        return self._fasta.fetch(contig, start - 1, end)
