"""Row normalization into canonical customers."""
from outreach.ingestion.mapping import UNMAPPED, propose_mapping
from outreach.ingestion.normalizer import cell_text, customers_from_payload, normalize_rows
from outreach.processing.phones import segment_phones


def test_auto_mapped_row_becomes_customer():
    headers = ["Firma", "Temsilci", "Tel", "Adres"]
    rows = [["CompanyA", "John Doe", "+1234,+5678", "USA"]]

    customers = normalize_rows(headers, rows, propose_mapping(headers))

    assert len(customers) == 1
    customer = customers[0]
    assert customer.company == "CompanyA"
    assert customer.representative == "John Doe"
    assert customer.phone == "+1234,+5678"
    assert customer.country == "USA"
    assert customer.email == ""
    assert customer.notes == ""
    assert segment_phones(customer.phone) == ["+1234", "+5678"]


def test_rows_without_company_phone_and_email_are_dropped():
    headers = ["Company", "Phone", "Email", "Country", "Website", "Notes", "Rep"]
    mapping = propose_mapping(headers)
    rows = [
        ["", "", "", "Turkey", "example.com", "Visited stand", "Ali"],
        ["X", "", "", "", "", "", ""],
    ]

    customers = normalize_rows(headers, rows, mapping)

    assert [c.company for c in customers] == ["X"]


def test_short_rows_and_unmapped_fields_yield_empty_strings():
    headers = ["Company", "Notes", "Phone"]
    mapping = {**propose_mapping(headers), "notes": UNMAPPED}

    customers = normalize_rows(headers, [["  Acme  ", "ignored"]], mapping)

    assert customers[0].company == "Acme"
    assert customers[0].notes == ""
    assert customers[0].phone == ""


def test_mapping_to_unknown_header_is_empty():
    customers = normalize_rows(["Company"], [["Acme"]], {"company": "Company", "email": "Mail"})

    assert customers[0].email == ""


def test_ids_are_unique_within_and_across_batches():
    headers = ["Company"]
    mapping = propose_mapping(headers)
    first = normalize_rows(headers, [["A"], ["B"]], mapping)
    second = normalize_rows(headers, [["A"], ["B"]], mapping)

    ids = [c.id for c in first + second]
    assert len(set(ids)) == 4
    assert all(customer_id.startswith("cust-file-") for customer_id in ids)


def test_cell_text_coerces_spreadsheet_values():
    assert cell_text(None) == ""
    assert cell_text(905321112233.0) == "905321112233"
    assert cell_text(12.5) == "12.5"
    assert cell_text(" text ") == "text"


def test_customers_from_payload_defaults_missing_keys():
    customers = customers_from_payload([{"company": "Acme", "notes": "n", "phone": None}], source_tag="img")

    assert customers[0].company == "Acme"
    assert customers[0].phone == ""
    assert customers[0].website == ""
    assert customers[0].id.startswith("cust-img-")
    assert customers[0].id.endswith("-0")
