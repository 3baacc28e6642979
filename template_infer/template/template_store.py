import json
from pathlib import Path
from typing import Any, Dict, Optional
from datetime import datetime


# ==============================================
# TemplateStore
# ==============================================
#
# PURPOSE:
#   Persist inference output to disk: the assembled template and the
#   per-section analysis report that explains how it was derived.
#
# WHAT IS PERSISTED:
#   1. Template document    → <name>.template.json
#   2. Analysis report      → <name>.analysis.json
#      (per-section scores, winning archetype, reasoning, warnings)
#
# CLASS: TemplateStore
# --------------------
#   Stateful: holds a reference to the output directory.
#
#   Constructor:
#   ------------
#   - __init__(output_dir: str = "output/")
#       Create output directory if it doesn't exist.
#
class TemplateStore:
    """
    Handles persistence of inferred templates to disk.

    Files created:
    - output/<name>.template.json  → AntiCMS v3 template
    - output/<name>.analysis.json  → Analysis report
    """

    TEMPLATE_SUFFIX = ".template.json"
    ANALYSIS_SUFFIX = ".analysis.json"

    def __init__(self, output_dir: str = "output/"):
        """
        Initialize the template store.

        Args:
            output_dir: Directory to store template files
        """
        self.output_dir = Path(output_dir)

        # Create directory if it doesn't exist
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def template_path(self, name: str) -> Path:
        return self.output_dir / f"{name}{self.TEMPLATE_SUFFIX}"

    def analysis_path(self, name: str) -> Path:
        return self.output_dir / f"{name}{self.ANALYSIS_SUFFIX}"

#   Methods:
#   --------
#   SAVING:
#   - save_template(template: dict) -> Path
#       Serialize the template document, keyed by its "name".
#
#   - save_analysis(name: str, report: dict) -> Path
#       Serialize the analysis report with a generation timestamp.
#
    def save_template(self, template: Dict[str, Any]) -> Path:
        """
        Save a template document to disk.

        Args:
            template: Assembled template (must carry "name")

        Returns:
            Path of the written file
        """
        path = self.template_path(template["name"])
        with open(path, 'w') as f:
            json.dump(template, f, indent=2)

        print(f"✓ Saved template '{template['name']}' "
              f"({len(template.get('components', []))} components) to {path}")
        return path

    def save_analysis(self, name: str, report: Dict[str, Any]) -> Path:
        """
        Save an analysis report to disk.

        Args:
            name: Template name the report belongs to
            report: JSON-serializable report

        Returns:
            Path of the written file
        """
        path = self.analysis_path(name)
        payload = {
            "template": name,
            "generated_at": datetime.now().isoformat(),
            "report": report,
        }
        with open(path, 'w') as f:
            json.dump(payload, f, indent=2)

        print(f"✓ Saved analysis report to {path}")
        return path

#   LOADING:
#   - load_template(name: str) -> dict | None
#       Deserialize a template. Return None if no file.
#
    def load_template(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Load a template document from disk.

        Returns:
            The template, or None if it was never saved
        """
        path = self.template_path(name)
        if not path.exists():
            print(f"⚠ No template file found at {path}")
            return None

        with open(path, 'r') as f:
            template = json.load(f)

        print(f"✓ Loaded template '{name}' from {path}")
        return template

#   UTILITY:
#   - exists(name: str) -> bool
#   - clear() -> None
#       Delete every template and analysis file (for testing or reset).
#
    def exists(self, name: str) -> bool:
        """True if a template with this name has been saved."""
        return self.template_path(name).exists()

    def clear(self) -> None:
        """
        Delete all template and analysis files (for testing or reset).
        """
        patterns = (f"*{self.TEMPLATE_SUFFIX}", f"*{self.ANALYSIS_SUFFIX}")
        for pattern in patterns:
            for file in sorted(self.output_dir.glob(pattern)):
                file.unlink()
                print(f"🗑️  Deleted {file}")

        print("All templates cleared!")
# FILE STRUCTURE:
# ---------------
#   output/
#   ├── landing_page.template.json  → {name, label, components, ...}
#   └── landing_page.analysis.json  → {template, generated_at, report}
#
# =============================================
