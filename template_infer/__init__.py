# ==============================================
# Template Inference Engine
# ==============================================
#
# Package Structure (4 Topics + Orchestrator):
#
# template_infer/
# ├── structure/        # Topic 1: Raw JSON → typed RawValue tree
# ├── analysis/         # Topic 2: Classify field names & resolve section archetypes
# ├── synthesis/        # Topic 3: Build FieldSpec trees from resolved sections
# ├── template/         # Topic 4: Assemble, validate & store template documents
# ├── config.py         # Configuration management
# ├── errors.py         # Exception hierarchy
# ├── infer_template.py # Final orchestrator class
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
