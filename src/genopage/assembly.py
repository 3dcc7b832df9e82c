"""
genome assemblies: chromosome sizes plus the optional gene and cytoband annotations used by gene and ideogram plots
"""
import warnings
from typing import Dict, List, Optional

from .constants import GIEMSA_STAIN
from .error import InvalidInputError, InvalidRegionError
from .interval import Interval
from .util import natural_sort_key


HG19_CHROM_SIZES = {
    'chr1': 249250621, 'chr2': 243199373, 'chr3': 198022430, 'chr4': 191154276, 'chr5': 180915260,
    'chr6': 171115067, 'chr7': 159138663, 'chr8': 146364022, 'chr9': 141213431, 'chr10': 135534747,
    'chr11': 135006516, 'chr12': 133851895, 'chr13': 115169878, 'chr14': 107349540, 'chr15': 102531392,
    'chr16': 90354753, 'chr17': 81195210, 'chr18': 78077248, 'chr19': 59128983, 'chr20': 63025520,
    'chr21': 48129895, 'chr22': 51304566, 'chrX': 155270560, 'chrY': 59373566,
}

HG38_CHROM_SIZES = {
    'chr1': 248956422, 'chr2': 242193529, 'chr3': 198295559, 'chr4': 190214555, 'chr5': 181538259,
    'chr6': 170805979, 'chr7': 159345973, 'chr8': 145138636, 'chr9': 138394717, 'chr10': 133797422,
    'chr11': 135086622, 'chr12': 133275309, 'chr13': 114364328, 'chr14': 107043718, 'chr15': 101991189,
    'chr16': 90338345, 'chr17': 83257441, 'chr18': 80373285, 'chr19': 58617616, 'chr20': 64444167,
    'chr21': 46709983, 'chr22': 50818468, 'chrX': 156040895, 'chrY': 57227415,
}


class Band(Interval):
    """
    cytoband of a chromosome, 1-based inclusive coordinates
    """

    def __init__(self, start, end, name=None, giemsa_stain=None):
        Interval.__init__(self, start, end)
        self.name = name
        self.giemsa_stain = GIEMSA_STAIN.enforce(giemsa_stain) if giemsa_stain is not None else None

    def __repr__(self):
        return 'Band({}, {}, {}, {})'.format(self.start, self.end, self.name, self.giemsa_stain)

    def __hash__(self):
        return hash((self.start, self.end, self.name))


class Template(Interval):
    """
    a chromosome and its bands
    """

    def __init__(self, name, start, end, bands=None):
        Interval.__init__(self, start, end)
        self.name = name
        self.bands = sorted(bands or [], key=lambda b: (b.start, b.end))

    def __repr__(self):
        return 'Template({}, {}, {}, bands={})'.format(self.name, self.start, self.end, len(self.bands))

    def __hash__(self):
        return hash((self.name, self.start, self.end))


class Assembly:
    """
    Args:
        genome (str): name of the genome build
        chrom_sizes (Dict[str,int]): length of each chromosome
        gene_table: transcript table (data frame or file) read by :func:`genopage.readers.read_gene_table`
        cytobands (Dict[str,Template]): chromosome bands by chromosome name
        gene_id_column (str): gene table column identifying genes
        display_column (str): gene table column used to label genes
    """

    def __init__(
        self,
        genome: str,
        chrom_sizes: Optional[Dict[str, int]] = None,
        gene_table=None,
        cytobands: Optional[Dict[str, Template]] = None,
        gene_id_column: str = 'gene_id',
        display_column: str = 'gene_name',
    ):
        self.genome = genome
        self.chrom_sizes = dict(chrom_sizes or {})
        self._gene_table = gene_table
        self.cytobands = cytobands or {}
        self.gene_id_column = gene_id_column
        self.display_column = display_column

    def __repr__(self):
        return 'Assembly({})'.format(repr(self.genome))

    @property
    def gene_table(self):
        from .readers import read_gene_table

        if self._gene_table is None:
            return None
        self._gene_table = read_gene_table(self._gene_table)
        return self._gene_table

    def chroms(self) -> List[str]:
        return sorted(self.chrom_sizes, key=natural_sort_key)

    def has_chrom(self, chrom: str) -> bool:
        return chrom in self.chrom_sizes

    def chrom_length(self, chrom: str) -> int:
        """
        Raises:
            InvalidRegionError: the chromosome is not part of the assembly
        """
        try:
            return self.chrom_sizes[chrom]
        except KeyError:
            raise InvalidRegionError(
                'chromosome not found in assembly {}'.format(self.genome), chrom)


_BUILT_IN = {
    'hg19': HG19_CHROM_SIZES,
    'hg38': HG38_CHROM_SIZES,
}


def default_genomes() -> List[str]:
    """
    names of the built-in assemblies
    """
    return sorted(_BUILT_IN.keys())


def parse_assembly(assembly) -> Assembly:
    """
    Args:
        assembly (Union[str,Assembly]): name of a built-in assembly or an assembly object

    Raises:
        InvalidInputError: the name is not a built-in assembly
    """
    if isinstance(assembly, Assembly):
        return assembly
    if assembly not in _BUILT_IN:
        raise InvalidInputError(
            'unrecognized assembly {}. Use one of the default genomes ({}) or create an Assembly'.format(
                repr(assembly), ', '.join(default_genomes())))
    return Assembly(assembly, _BUILT_IN[assembly])


def check_assembly_match(data_genome, assembly) -> bool:
    """
    warn when the genome of some data source does not match the genome of the assembly being plotted

    Returns:
        bool: True if they match
    """
    if isinstance(data_genome, Assembly):
        data_genome = data_genome.genome
    assembly = parse_assembly(assembly)
    if data_genome is not None and data_genome != assembly.genome:
        warnings.warn(
            'genome assembly of the data ({}) does not match the requested assembly ({})'.format(
                data_genome, assembly.genome))
        return False
    return True
