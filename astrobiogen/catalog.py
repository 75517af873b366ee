# astrobiogen/catalog.py
# Bundled GeneLab dataset: experiment summaries, detail records and per-experiment gene sets.

from __future__ import annotations

from typing import Any, Dict, List

EXPERIMENTS: List[Dict[str, Any]] = [
    {
        "id": "GLDS-47",
        "title": "Mouse Muscular Response to Microgravity",
        "organism": "Mus musculus (Mouse)",
        "mission": "SpaceX CRS-8",
        "date": "2016-04-08",
        "description": "Study of muscle gene expression changes in mice after 30 days in microgravity",
        "tissue": "Skeletal muscle",
        "datasetType": "Transcriptomics",
    },
    {
        "id": "GLDS-168",
        "title": "Arabidopsis Response to Spaceflight",
        "organism": "Arabidopsis thaliana",
        "mission": "ISS Expedition 39/40",
        "date": "2014-09-21",
        "description": "Gene expression analysis of Arabidopsis plants grown on the ISS",
        "tissue": "Whole seedling",
        "datasetType": "Transcriptomics",
    },
    {
        "id": "GLDS-218",
        "title": "Human Immune Cell Response to Spaceflight",
        "organism": "Homo sapiens",
        "mission": "SpaceX CRS-13",
        "date": "2018-01-13",
        "description": "Analysis of T-cell activation in microgravity",
        "tissue": "T-lymphocytes",
        "datasetType": "Transcriptomics",
    },
    {
        "id": "GLDS-120",
        "title": "Rodent Research-1 (RR1)",
        "organism": "Mus musculus (Mouse)",
        "mission": "SpaceX CRS-4",
        "date": "2014-09-21",
        "description": "Effects of spaceflight on mouse liver gene expression",
        "tissue": "Liver",
        "datasetType": "Transcriptomics",
    },
    {
        "id": "GLDS-258",
        "title": "Bacterial Growth in Space",
        "organism": "Escherichia coli",
        "mission": "ISS Expedition 50",
        "date": "2017-02-19",
        "description": "Bacterial adaptation to microgravity environment",
        "tissue": "Whole organism",
        "datasetType": "Transcriptomics",
    },
]


def _flight_ground(prefix_flight: str, prefix_ground: str) -> List[Dict[str, str]]:
    flight = [{"id": f"{prefix_flight}{i}", "type": "Flight", "condition": "Microgravity"} for i in (1, 2, 3)]
    ground = [{"id": f"{prefix_ground}{i}", "type": "Ground Control", "condition": "1G"} for i in (1, 2, 3)]
    return flight + ground


def _data_files(counts: str, dge: str, meta: str) -> List[Dict[str, Any]]:
    return [
        {"name": "gene_counts.csv", "type": "Gene Counts", "size": counts, "url": None},
        {"name": "differential_expression.csv", "type": "Differential Expression", "size": dge, "url": None},
        {"name": "sample_metadata.csv", "type": "Metadata", "size": meta, "url": None},
    ]


EXPERIMENT_DETAILS: Dict[str, Dict[str, Any]] = {
    "GLDS-47": {
        "id": "GLDS-47",
        "title": "Mouse Muscular Response to Microgravity",
        "organism": "Mus musculus (Mouse)",
        "strain": "C57BL/6J",
        "mission": "SpaceX CRS-8",
        "date": "2016-04-08",
        "launchDate": "2016-04-08",
        "landingDate": "2016-05-11",
        "duration": "33 days",
        "description": "Study of muscle gene expression changes in mice after 30 days in microgravity",
        "tissue": "Skeletal muscle (gastrocnemius)",
        "datasetType": "Transcriptomics",
        "platform": "Illumina HiSeq 2500",
        "principalInvestigator": "Dr. Sarah Johnson",
        "institution": "NASA Ames Research Center",
        "samples": _flight_ground("FLT-", "GC-"),
        "dataFiles": _data_files("2.4 MB", "1.8 MB", "0.2 MB"),
    },
    "GLDS-168": {
        "id": "GLDS-168",
        "title": "Arabidopsis Response to Spaceflight",
        "organism": "Arabidopsis thaliana",
        "strain": "Columbia-0",
        "mission": "ISS Expedition 39/40",
        "date": "2014-09-21",
        "launchDate": "2014-04-18",
        "landingDate": "2014-09-21",
        "duration": "156 days",
        "description": "Gene expression analysis of Arabidopsis plants grown on the ISS",
        "tissue": "Whole seedling",
        "datasetType": "Transcriptomics",
        "platform": "Illumina NextSeq 500",
        "principalInvestigator": "Dr. Anna Martinez",
        "institution": "University of Florida",
        "samples": _flight_ground("ISS-", "GC-"),
        "dataFiles": _data_files("3.1 MB", "2.2 MB", "0.3 MB"),
    },
    "GLDS-218": {
        "id": "GLDS-218",
        "title": "Human Immune Cell Response to Spaceflight",
        "organism": "Homo sapiens",
        "strain": "N/A",
        "mission": "SpaceX CRS-13",
        "date": "2018-01-13",
        "launchDate": "2017-12-15",
        "landingDate": "2018-01-13",
        "duration": "29 days",
        "description": "Analysis of T-cell activation in microgravity",
        "tissue": "T-lymphocytes",
        "datasetType": "Transcriptomics",
        "platform": "Illumina HiSeq 4000",
        "principalInvestigator": "Dr. Michael Chen",
        "institution": "Stanford University",
        "samples": _flight_ground("FLT-T", "GC-T"),
        "dataFiles": _data_files("2.8 MB", "2.0 MB", "0.3 MB"),
    },
}


def _g(symbol: str, name: str, fc: float, p: float, fn: str) -> Dict[str, Any]:
    return {"gene_symbol": symbol, "gene_name": name, "fold_change": fc, "p_value": p, "function": fn}


GENE_SETS: Dict[str, List[Dict[str, Any]]] = {
    "GLDS-47": [
        _g("MYH7", "Myosin Heavy Chain 7", -2.8, 0.0001, "Muscle contraction, cardiac muscle development"),
        _g("ACTA1", "Actin Alpha 1", -2.3, 0.0003, "Skeletal muscle thin filament assembly"),
        _g("MYBPC2", "Myosin Binding Protein C2", -2.1, 0.0008, "Regulation of muscle contraction"),
        _g("TNNT3", "Troponin T3", -1.9, 0.0012, "Skeletal muscle contraction"),
        _g("MYL1", "Myosin Light Chain 1", -1.7, 0.0015, "Muscle contraction"),
        _g("FOXO1", "Forkhead Box O1", 1.8, 0.0022, "Muscle atrophy, stress response"),
        _g("TRIM63", "Tripartite Motif Containing 63", 2.1, 0.0009, "Muscle atrophy, protein degradation"),
        _g("FBXO32", "F-Box Protein 32", 2.4, 0.0005, "Muscle atrophy, protein degradation"),
        _g("MT1", "Metallothionein 1", 2.7, 0.0002, "Oxidative stress response"),
        _g("SOD2", "Superoxide Dismutase 2", 1.6, 0.0030, "Antioxidant defense"),
    ],
    "GLDS-168": [
        _g("ATHB-7", "Arabidopsis thaliana Homeobox 7", 2.9, 0.0002, "Response to water deprivation"),
        _g("HSP70", "Heat Shock Protein 70", 2.5, 0.0004, "Stress response, protein folding"),
        _g("RBCS", "Ribulose Bisphosphate Carboxylase Small Chain", -1.8, 0.0015, "Photosynthesis"),
        _g("CAB1", "Chlorophyll A/B Binding Protein 1", -2.1, 0.0008, "Light harvesting in photosynthesis"),
        _g("DREB2A", "Dehydration-Responsive Element-Binding Protein 2A", 1.9, 0.0012, "Stress response transcription factor"),
        _g("APX1", "Ascorbate Peroxidase 1", 1.7, 0.0020, "Antioxidant defense"),
        _g("XTH9", "Xyloglucan Endotransglucosylase/Hydrolase 9", 2.2, 0.0007, "Cell wall modification"),
        _g("PIN1", "Pin-Formed 1", -1.6, 0.0025, "Auxin transport, gravitropism"),
        _g("SCR", "Scarecrow", -1.5, 0.0030, "Root development, gravitropism"),
        _g("CHS", "Chalcone Synthase", 1.4, 0.0040, "Flavonoid biosynthesis, UV protection"),
    ],
    "GLDS-218": [
        _g("IL2RA", "Interleukin 2 Receptor Subunit Alpha", -2.3, 0.0004, "T cell activation and proliferation"),
        _g("CD28", "CD28 Molecule", -1.9, 0.0009, "T cell co-stimulation"),
        _g("IFNG", "Interferon Gamma", -2.5, 0.0002, "Cytokine activity, immune response"),
        _g("TNF", "Tumor Necrosis Factor", -1.7, 0.0015, "Cytokine activity, inflammatory response"),
        _g("IL10", "Interleukin 10", 1.8, 0.0011, "Anti-inflammatory cytokine"),
        _g("HSPA1A", "Heat Shock Protein Family A Member 1A", 2.4, 0.0003, "Stress response, protein folding"),
        _g("SOD1", "Superoxide Dismutase 1", 1.6, 0.0020, "Antioxidant defense"),
        _g("CASP3", "Caspase 3", 1.5, 0.0025, "Apoptosis execution"),
        _g("TP53", "Tumor Protein P53", 1.7, 0.0018, "DNA damage response, apoptosis"),
        _g("NFKB1", "Nuclear Factor Kappa B Subunit 1", 1.4, 0.0030, "Transcription factor, immune response"),
    ],
}
