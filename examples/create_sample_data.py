"""Crée des fichiers de démonstration pour ConcordNoms."""

import pandas as pd
from pathlib import Path

DATA_DIR = Path(__file__).parent / "data"
DATA_DIR.mkdir(exist_ok=True)

source = pd.DataFrame({
    "nom": ["Tan Ah Kow", "Jane Doe", "Al", "Marie-Claire Dupont", "John Smith"],
    "service": ["Compta", "RH", "IT", "Direction", "Ventes"],
    "email": ["tan@example.org", "jane@example.org", "al@example.org", "mcd@example.org", ""],
})

target = pd.DataFrame({
    "name": ["Kow Ah Tan", "Jane Doh", "Albert", "Dupont Marie-Claire", "Smith"],
    "matricule": ["A01", "A02", "A03", "A04", "A05"],
})

source.to_csv(DATA_DIR / "source.csv", index=False, encoding="utf-8")
target.to_excel(DATA_DIR / "target.xlsx", index=False, engine="openpyxl")
print(f"Fichiers créés dans {DATA_DIR}")
print(
    "Essai: concordnoms run -s examples/data/source.csv -t examples/data/target.xlsx "
    "--source-col nom --target-col name --col service -o resultats.csv"
)
