# src/physiotrace/catalog.py
from typing import Iterable, Optional, Sequence

from .types import Compound, Pathway

# Rough textbook values for an illustrative simulation; thresholds are not clinical cut-offs.
DEFAULT_LIBRARY: tuple[Compound, ...] = (
    # Stimulants
    Compound("caffeine", "Caffeine", half_life_h=5.0, bioavailability=0.99, time_to_peak_h=0.75,
             vd_L_per_kg=0.7, tox_threshold_mg_per_L=60.0, metabolism="neurological",
             category="Stimulant", description="CNS stimulant. Blocks adenosine receptors.",
             color="#d97706", default_dose_mg=100),
    Compound("methylphenidate", "Methylphenidate", half_life_h=3.5, bioavailability=0.3, time_to_peak_h=2.0,
             vd_L_per_kg=2.7, tox_threshold_mg_per_L=0.04, metabolism="hepatic",  # upper therapeutic bound
             category="Stimulant", description="CNS stimulant used for ADHD.",
             color="#f97316", default_dose_mg=20),

    # Analgesics
    Compound("ibuprofen", "Ibuprofen", half_life_h=2.0, bioavailability=0.85, time_to_peak_h=1.5,
             vd_L_per_kg=0.15, tox_threshold_mg_per_L=80.0, metabolism="gastric",
             category="Analgesic", description="NSAID used for pain and inflammation.",
             color="#ef4444", default_dose_mg=400),
    Compound("paracetamol", "Acetaminophen", half_life_h=2.5, bioavailability=0.88, time_to_peak_h=1.0,
             vd_L_per_kg=0.95, tox_threshold_mg_per_L=150.0, metabolism="hepatic",
             category="Analgesic", description="Analgesic and antipyretic.",
             color="#3b82f6", default_dose_mg=500),
    Compound("aspirin", "Aspirin", half_life_h=0.25, bioavailability=0.68, time_to_peak_h=0.5,
             vd_L_per_kg=0.17, tox_threshold_mg_per_L=300.0, metabolism="renal",  # parent compound only
             category="Analgesic", description="Salicylate used to reduce pain, fever, or inflammation.",
             color="#ec4899", default_dose_mg=325),

    # Psychotropics
    Compound("sertraline", "Sertraline", half_life_h=26.0, bioavailability=0.44, time_to_peak_h=6.0,
             vd_L_per_kg=25.0, tox_threshold_mg_per_L=0.5, metabolism="hepatic",
             category="Psychotropic", description="SSRI antidepressant.",
             color="#10b981", default_dose_mg=50),
    Compound("alprazolam", "Alprazolam", half_life_h=11.2, bioavailability=0.90, time_to_peak_h=1.5,
             vd_L_per_kg=1.0, tox_threshold_mg_per_L=0.1, metabolism="hepatic",
             category="Psychotropic", description="Benzodiazepine for anxiety disorders.",
             color="#14b8a6", default_dose_mg=1),

    # Cardiovascular
    Compound("atorvastatin", "Atorvastatin", half_life_h=14.0, bioavailability=0.14, time_to_peak_h=1.5,
             vd_L_per_kg=5.5, tox_threshold_mg_per_L=0.05, metabolism="hepatic",
             category="Cardiovascular", description="Statin medication for high cholesterol.",
             color="#f59e0b", default_dose_mg=20),
    Compound("metoprolol", "Metoprolol", half_life_h=3.5, bioavailability=0.50, time_to_peak_h=1.5,
             vd_L_per_kg=4.2, tox_threshold_mg_per_L=0.5, metabolism="cardiovascular",  # tartrate
             category="Cardiovascular", description="Beta-blocker for high blood pressure.",
             color="#6366f1", default_dose_mg=50),

    # Antibiotics
    Compound("amoxicillin", "Amoxicillin", half_life_h=1.0, bioavailability=0.95, time_to_peak_h=2.0,
             vd_L_per_kg=0.3, tox_threshold_mg_per_L=20.0, metabolism="renal",
             category="Antibiotic", description="Penicillin antibiotic.",
             color="#8b5cf6", default_dose_mg=500),

    # Supplements
    Compound("melatonin", "Melatonin", half_life_h=0.8, bioavailability=0.15, time_to_peak_h=0.5,
             vd_L_per_kg=1.2, tox_threshold_mg_per_L=500.0, metabolism="neurological",
             category="Supplement", description="Hormone regulating sleep-wake cycles.",
             color="#8b5cf6", default_dose_mg=3),
)


def find_compound(compound_id: str, library: Iterable[Compound] = DEFAULT_LIBRARY) -> Compound:
    for c in library:
        if c.compound_id == compound_id:
            return c
    raise KeyError(f"Unknown compound_id '{compound_id}'.")


def search_library(query: str, library: Iterable[Compound] = DEFAULT_LIBRARY) -> tuple[Compound, ...]:
    """
    Case-insensitive substring match on name or category. An empty query returns everything.
    """
    q = query.strip().lower()
    return tuple(c for c in library if q in c.name.lower() or q in c.category.lower())


def metabolic_crowding(compounds: Sequence[Compound]) -> Optional[Pathway]:
    """
    First clearance pathway shared by two or more active compounds, or None.
    "First" follows the order in which the second claimant appears in compounds.
    """
    seen: set[str] = set()
    for c in compounds:
        if c.metabolism in seen:
            return c.metabolism
        seen.add(c.metabolism)
    return None
