"""Streamlit console to import leads, review drafts, and archive outreach."""
import tempfile
from pathlib import Path
from typing import List

import streamlit as st

# Allow running via "streamlit run outreach/ui/dashboard.py" without installing the package
# by ensuring the repository root is on ``sys.path``.
if __package__ in {None, ""}:
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[2]))

from outreach.core.logging import configure_logging
from outreach.core.models import CANONICAL_FIELDS, Customer, GeneratedMessage
from outreach.core.utils import default_context, get_config_value
from outreach.ingestion.extraction import ExtractionError, extract_from_image, extract_from_text
from outreach.ingestion.mapping import UNMAPPED, propose_mapping
from outreach.ingestion.normalizer import normalize_rows
from outreach.ingestion.tables import read_table, split_pasted_table
from outreach.processing.drafting import DraftGenerator, draft_customer, generate_all, switch_language
from outreach.processing.links import clipboard_text, contact_links, website_url
from outreach.reporting.templates import archive_to_csv, entries_to_rows
from outreach.review.workspace import Workspace

LANGUAGE_LABELS = {"en": "🇺🇸 EN", "ar": "🇪🇬 AR"}


def _rerun_app() -> None:
    """Trigger a Streamlit rerun, compatible with newer and older APIs."""

    rerun = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if not rerun:
        raise RuntimeError("Streamlit does not expose a rerun helper.")
    rerun()


def _workspace() -> Workspace:
    if "workspace" not in st.session_state:
        st.session_state.workspace = Workspace(default_context())
    return st.session_state.workspace


def _generator() -> DraftGenerator:
    if "generator" not in st.session_state:
        st.session_state.generator = DraftGenerator()
    return st.session_state.generator


def _clear_error() -> None:
    """Forget the last import error; called whenever a new action starts."""

    st.session_state.error = None


def _load_customers(customers: List[Customer]) -> None:
    _workspace().load(customers)
    st.session_state.pop("pending_table", None)
    _clear_error()


def _campaign_settings(workspace: Workspace) -> None:
    """Sidebar inputs for the sender and exhibition details."""

    st.subheader("Campaign configuration")
    context = workspace.context
    sender_company = st.text_input("Company name", value=context.sender_company)
    sender_name = st.text_input("Sender name", value=context.sender_name)
    event_name = st.text_input("Exhibition name", value=context.event_name)
    event_location = st.text_input("Location", value=context.event_location)
    workspace.update_context(
        sender_company=sender_company,
        sender_name=sender_name,
        event_name=event_name,
        event_location=event_location,
    )
    st.caption("These details are used in every draft generated from now on.")

    if get_config_value("AI_DRAFTING_DISABLED", "0") == "1":
        st.warning("🚫 AI drafting disabled; template drafts will be used.")
    elif not get_config_value("OPENAI_API_KEY"):
        st.error("⚠️ OPENAI_API_KEY not found! Drafts fall back to templates and photo import is unavailable.")
    else:
        st.success("✨ AI drafting active")


def _mapping_form(headers: List[str], rows: list) -> None:
    """Let the operator confirm which column feeds each field."""

    st.markdown("#### Confirm column mapping")
    proposed = propose_mapping(headers)
    options = [UNMAPPED, *headers]
    mapping = {}
    cols = st.columns(len(CANONICAL_FIELDS))
    for col, field in zip(cols, CANONICAL_FIELDS):
        with col:
            mapping[field] = st.selectbox(
                field.capitalize(),
                options=options,
                index=options.index(proposed[field]),
                key=f"map_{field}",
            )
    st.dataframe([dict(zip(headers, row)) for row in rows[:5]], use_container_width=True, hide_index=True)
    if st.button("Import rows", type="primary"):
        _clear_error()
        customers = normalize_rows(headers, rows, mapping)
        if not customers:
            st.session_state.error = "No rows with a company, phone, or email were found."
        else:
            _load_customers(customers)
        _rerun_app()


def _import_section() -> None:
    st.header("Import your customer list")
    st.write("Upload a spreadsheet or a clear photo, or paste rows copied from Excel.")
    sheet_tab, paste_tab, photo_tab = st.tabs(["Spreadsheet", "Paste", "Photo"])

    with sheet_tab:
        upload = st.file_uploader("Spreadsheet", type=["xlsx", "xlsm", "csv", "tsv"])
        if upload is not None and st.button("Read spreadsheet"):
            _clear_error()
            suffix = Path(upload.name).suffix
            with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as handle:
                handle.write(upload.getvalue())
            try:
                st.session_state.pending_table = read_table(Path(handle.name))
            except ValueError as exc:
                st.session_state.error = str(exc)
            finally:
                Path(handle.name).unlink(missing_ok=True)
            _rerun_app()

    with paste_tab:
        pasted = st.text_area("Paste spreadsheet rows", height=200)
        st.caption("Tip: include the header row. Tab-separated rows are mapped locally, anything else is read by AI.")
        if st.button("Process text", disabled=not pasted.strip()):
            _clear_error()
            table = split_pasted_table(pasted)
            if table is not None:
                st.session_state.pending_table = table
            else:
                with st.spinner("Analyzing rows, identifying contacts and notes..."):
                    try:
                        _load_customers(extract_from_text(pasted))
                    except ExtractionError as exc:
                        st.session_state.error = str(exc)
            _rerun_app()

    with photo_tab:
        photo = st.file_uploader("Table photo", type=["png", "jpg", "jpeg", "webp"])
        if photo is not None and st.button("Extract from photo"):
            _clear_error()
            with st.spinner("Processing data..."):
                try:
                    _load_customers(extract_from_image(photo.getvalue(), mime_type=photo.type or "image/png"))
                except ExtractionError as exc:
                    st.session_state.error = str(exc)
            _rerun_app()

    pending = st.session_state.get("pending_table")
    if pending:
        headers, rows = pending
        if not headers:
            st.session_state.error = "The spreadsheet is empty."
            st.session_state.pop("pending_table", None)
        else:
            _mapping_form(headers, rows)


def _draft_panel(workspace: Workspace, customer: Customer, message: GeneratedMessage) -> None:
    email_tab, chat_tab = st.tabs(["✉️ Email", "💬 WhatsApp"])
    links = contact_links(customer, message)
    with email_tab:
        st.code(clipboard_text(message, "email"), language=None)
        if links["mailto"]:
            st.link_button("Open in mail app", links["mailto"])
        if st.button("💾 Save as emailed", key=f"save_email_{customer.id}"):
            workspace.archive(customer.id, "email")
            _rerun_app()
    with chat_tab:
        st.code(clipboard_text(message, "whatsapp"), language=None)
        for chat in links["chats"]:
            st.markdown(f"**{chat['number']}**")
            web_col, app_col, biz_col = st.columns(3)
            web_col.link_button("Web", chat["web"])
            app_col.link_button("App", chat["app"])
            biz_col.link_button("Biz", chat["business"])
        if not links["chats"]:
            st.caption("No phone numbers")
        if st.button("💾 Save as messaged", key=f"save_whatsapp_{customer.id}"):
            workspace.archive(customer.id, "whatsapp")
            _rerun_app()


def _edit_form(workspace: Workspace, customer: Customer) -> None:
    """Let the operator correct extracted fields before drafting."""

    with st.expander("✏️ Edit details"):
        with st.form(key=f"edit_{customer.id}"):
            updates = {
                field: st.text_input(
                    field.capitalize(), value=getattr(customer, field), key=f"edit_{field}_{customer.id}"
                )
                for field in CANONICAL_FIELDS
            }
            if st.form_submit_button("Apply"):
                workspace.edit(customer.id, updates)
                _rerun_app()


def _customer_card(workspace: Workspace, customer: Customer) -> None:
    message = workspace.drafts.get(customer.id)
    with st.container(border=True):
        head, lang_col, actions = st.columns([3, 1, 2])
        with head:
            st.markdown(f"### {customer.company or 'Unknown Company'}")
            st.caption(" · ".join(filter(None, [customer.representative or "No Rep Name", customer.country])))
        with lang_col:
            current = message.language if message else "en"
            language = st.radio(
                "Language",
                options=list(LANGUAGE_LABELS),
                index=list(LANGUAGE_LABELS).index(current),
                format_func=LANGUAGE_LABELS.get,
                horizontal=True,
                key=f"lang_{customer.id}",
                label_visibility="collapsed",
            )
        with actions:
            if message is not None and language != message.language:
                with st.spinner("Drafting..."):
                    switch_language(workspace, _generator(), customer.id, language)
                _rerun_app()
            label = "Generate Draft" if message is None else "Regenerate"
            if st.button(label, key=f"gen_{customer.id}", type="primary"):
                with st.spinner("Drafting..."):
                    draft_customer(workspace, _generator(), customer.id, language)
                _rerun_app()
            if st.button("🗑️ Delete", key=f"del_{customer.id}"):
                workspace.delete(customer.id)
                _rerun_app()

        details, draft = st.columns(2)
        with details:
            if customer.phone:
                st.write(f"📞 {customer.phone}")
            if customer.email:
                st.write(f"✉️ {customer.email}")
            if customer.website:
                st.markdown(f"🌐 [{customer.website}]({website_url(customer.website)})")
            st.info(f"Notes (Açıklama): {customer.notes or 'No specific notes'}")
            _edit_form(workspace, customer)
        with draft:
            if message is not None:
                _draft_panel(workspace, customer, message)
            else:
                st.caption("No draft yet.")


def _archive_section(workspace: Workspace) -> None:
    entries = workspace.archive_entries
    if not entries:
        return
    st.header(f"Completed interactions ({len(entries)})")
    st.dataframe(entries_to_rows(entries), use_container_width=True, hide_index=True)
    st.download_button(
        "Export CSV",
        data=archive_to_csv(entries),
        file_name="processed_customers.csv",
        mime="text/csv",
    )
    labels = {entry.customer.id: entry.customer.company or entry.customer.id for entry in entries}
    remove_id = st.selectbox("Remove entry", options=list(labels), format_func=labels.get)
    if st.button("Remove"):
        workspace.remove_archived(remove_id)
        _rerun_app()


def main() -> None:
    """Launch the outreach console."""

    configure_logging()
    st.set_page_config(page_title="Lead Outreach", layout="wide", initial_sidebar_state="expanded")
    st.title("Exhibition Follow-up Outreach")

    workspace = _workspace()
    st.session_state.setdefault("error", None)
    with st.sidebar:
        _campaign_settings(workspace)

    if st.session_state.error:
        st.error(st.session_state.error)

    if not workspace.customers:
        _import_section()
    else:
        st.subheader(f"Active contacts ({len(workspace.customers)})")
        st.caption("Review the data, generate drafts, and save to archive.")
        start_col, all_col = st.columns([1, 1])
        if start_col.button("Start Over"):
            _clear_error()
            workspace.reset()
            _rerun_app()
        if all_col.button("✨ Generate All (English)", type="primary"):
            progress = st.progress(0.0, text="Generating drafts...")
            generate_all(
                workspace,
                _generator(),
                language="en",
                progress_callback=lambda value: progress.progress(value, text="Generating drafts..."),
            )
            progress.empty()
            _rerun_app()

        for customer in workspace.customers:
            _customer_card(workspace, customer)

    _archive_section(workspace)


if __name__ == "__main__":
    main()
