import json
import sys
import tempfile
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ldp_migrate.config import MigrationSettings
from ldp_migrate.processing.pipeline import MigrationPipeline

PREFIXES = """@prefix ldp: <http://www.w3.org/ns/ldp#> .
@prefix ebucore: <http://www.ebu.ch/metadata/ontologies/ebucore/ebucore#> .
"""


def build_sample_export(root: Path):
    """Write a tiny export: one container, one local binary, one external binary"""
    files = {
        "rest.ttl": "<http://localhost:8080/rest> a ldp:Container .\n",
        "rest/photo/fcr%3Ametadata.ttl": (
            "<http://localhost:8080/rest/photo> a ldp:NonRDFSource ;\n"
            '    ebucore:hasMimeType "image/jpeg" .\n'
        ),
        "rest/remote/fcr%3Ametadata.ttl": (
            "<http://localhost:8080/rest/remote> a ldp:NonRDFSource ;\n"
            "    ebucore:hasMimeType 'message/external-body; access-type=URL; "
            'url="https://example.org/archive.zip"\' .\n'
        ),
    }
    for relative, body in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(PREFIXES + body, encoding="utf-8")
    (root / "rest" / "photo.binary").write_bytes(b"\xff\xd8\xff")


def main():
    """Run a sample migration"""

    print("=" * 80)
    print("Export Migration Sample Usage")
    print("=" * 80)
    print()

    workdir = Path(tempfile.mkdtemp(prefix="ldp-migrate-"))
    input_dir = workdir / "export"
    output_dir = workdir / "migrated"

    # 1. Build input
    print("1. Writing sample export...")
    build_sample_export(input_dir)
    print(f"   ✓ Export written to {input_dir}")
    print()

    # 2. Migrate
    print("2. Migrating...")
    settings = MigrationSettings(input_dir=input_dir, output_dir=output_dir)
    summary = MigrationPipeline(settings).run()
    print(f"   ✓ {summary.migrated} description files migrated, {summary.rewritten} rewritten")
    print()

    # 3. Show sidecars
    print("3. Header files:")
    for headers_file in sorted(output_dir.rglob("*.headers")):
        print(f"\n   {headers_file.relative_to(output_dir)}")
        for name, values in json.loads(headers_file.read_text()).items():
            for value in values:
                print(f"     {name}: {value}")
    print()

    print("=" * 80)
    print("✓ Sample completed successfully!" if summary.ok else "✗ Some files failed")
    print("=" * 80)
    print()
    print("Next steps:")
    print(f"  1. Inspect a file: python -m ldp_migrate.cli inspect {output_dir / 'rest.ttl'}")
    print("  2. Migrate a real export: python -m ldp_migrate.cli migrate EXPORT_DIR OUTPUT_DIR")
    print()


if __name__ == "__main__":
    main()
