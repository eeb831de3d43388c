import shutil
from docutrust.orchestrator.pipeline import DocuTrustEngine

# --- AUDIT-STYLE UI THEME ---
class Colors:
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'

    HEADER = '\033[1m'
    MUTED = '\033[90m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

    BORDER = MUTED
    LABEL = ENDC
    VALUE = BOLD

def print_separator(char="-"):
    width = shutil.get_terminal_size().columns
    print(Colors.BORDER + (char * width) + Colors.ENDC)

def print_section(title):
    print("\n")
    print_separator("=")
    print(f"  {Colors.HEADER}{title.upper()}{Colors.ENDC}")
    print_separator("=")

def print_kv(key, value, color=Colors.VALUE):
    print(f"{Colors.LABEL}{key:<25}{Colors.ENDC} : {color}{value}{Colors.ENDC}")

def score_color(score):
    if score >= 70:
        return Colors.OKGREEN
    if score >= 40:
        return Colors.WARNING
    return Colors.FAIL

# --- MAIN DEMO ---
INVOICES = [
    ("INV-001", "Acme Stationers", 500, "Please process this payment for office supplies."),
    ("INV-002", "Acme Stationers", 750, "Printer toner and paper for the finance team, March batch."),
    ("INV-003", "Shady Consulting", 2_400_000, "URGENT kindly approve misc adjustment fee asap. Contact rk@shady.biz"),
    ("INV-004", "Shady Consulting", 2_400_000, "URGENT kindly approve misc adjustment fee asap. Contact rk@shady.biz"),
]

def run_ledger_demo():
    engine = DocuTrustEngine()

    for invoice_number, vendor, amount, description in INVOICES:
        print_section(f"Ingest {invoice_number}")
        record = engine.ingest(invoice_number, vendor, amount, description)

        print_kv("Vendor", f"{vendor} ({record.vendor_pattern.value})")
        print_kv("Redacted Text", record.redacted_description)
        print_kv("Tone / Fishiness", f"{record.tone_score} / {record.fishiness_score}")
        print_kv("Transparency / Clarity", f"{record.transparency_index} / {record.clarity_score}")
        print_kv("Plagiarism", f"{record.plagiarism_score}%")
        print_kv("PII", ", ".join(record.pii) or "None")
        print_kv("Reputation (DRS)", record.reputation_score, score_color(record.reputation_score))
        print_kv("Storyline", record.storyline or "-")
        print_kv("Previous Hash", record.previous_hash[:16], Colors.MUTED)
        print_kv("Record Hash", record.record_hash[:16], Colors.MUTED)

    print_section("Chain Verification")
    engine.verify()
    print(f"{Colors.OKGREEN}✔ {len(engine.list_records())} records, chain intact.{Colors.ENDC}")
    print_separator("=")
    print("\n")

if __name__ == "__main__":
    run_ledger_demo()
