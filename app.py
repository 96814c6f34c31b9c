"""
ColdCraft - Streamlit UI
Fill in recipient and sender details to generate a templated cold email,
group generated emails into follow-up sequences, and preview them as plain
text, HTML or on a simulated phone screen.
"""

import logging

import streamlit as st
from dotenv import load_dotenv

from coldcraft.config import AppConfig
from coldcraft.errors import ColdCraftError
from coldcraft.models import FormFields, GeneratedEmail, Sequence, Tone
from coldcraft.preview import (
    PreviewMode,
    esc,
    export_filename,
    render,
    render_plain_text,
    save_text_export,
)
from coldcraft.sequence_builder import toggle_selection
from coldcraft.session import OutreachSession

load_dotenv()

CONFIG = AppConfig.from_env()
logging.basicConfig(level=CONFIG.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("coldcraft.app")


# --- Page Config ---
st.set_page_config(
    page_title="ColdCraft",
    page_icon="C",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# --- Custom Styling ---
st.markdown("""
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700;800&display=swap');

html, body, [class*="css"] {
    font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
}
.main .block-container {
    padding-bottom: 2rem;
    max-width: 1100px;
    margin: 0 auto;
}
#MainMenu {visibility: hidden !important;}
footer {visibility: hidden !important;}

/* ===== Tab Bar ===== */
div[data-testid="stTabs"] [role="tablist"] {
    background: #f5f7fa;
    border-radius: 12px;
    padding: 4px;
    gap: 4px;
    border: 1px solid #e2e6ec;
}
div[data-testid="stTabs"] button[role="tab"] {
    border-radius: 9px !important;
    padding: 0.5rem 1.25rem !important;
    font-weight: 600 !important;
}
div[data-testid="stTabs"] button[role="tab"][aria-selected="true"] {
    background: #ffffff !important;
    box-shadow: 0 1px 4px rgba(0,0,0,0.08);
}

/* ===== Cards ===== */
.email-card {
    background: #f5f7fa;
    border: 1px solid #e2e6ec;
    border-radius: 12px;
    padding: 1rem 1.25rem;
    margin-bottom: 0.75rem;
}
.email-card-subject { font-weight: 600; color: #1e2a3a; margin: 0 0 0.35rem 0; }
.email-card-meta { font-size: 0.8rem; color: #6b7685; margin: 0; }
.tag-pill {
    display: inline-block;
    padding: 0.15rem 0.65rem;
    border-radius: 20px;
    font-size: 0.75rem;
    font-weight: 600;
    margin-left: 0.4rem;
    background: rgba(14, 165, 233, 0.08);
    color: #0369a1;
    border: 1px solid rgba(14, 165, 233, 0.15);
}
.status-draft { background: #f3f4f6; color: #374151; border-color: #e5e7eb; }
.status-active { background: #dcfce7; color: #15803d; border-color: #bbf7d0; }
.status-paused { background: #fef9c3; color: #a16207; border-color: #fef08a; }

/* ===== Section Headers ===== */
.section-header { display: flex; align-items: center; gap: 0.75rem; margin: 1rem 0 0.75rem 0; }
.section-icon {
    width: 36px; height: 36px; border-radius: 9px;
    display: flex; align-items: center; justify-content: center; flex-shrink: 0;
}
.section-icon svg { width: 18px; height: 18px; }
.section-icon-blue { background: rgba(14, 165, 233, 0.1); }
.section-icon-blue svg { stroke: #0ea5e9; }
.section-icon-purple { background: rgba(168, 85, 247, 0.1); }
.section-icon-purple svg { stroke: #a855f7; }
.section-icon-green { background: rgba(34, 154, 60, 0.1); }
.section-icon-green svg { stroke: #229a3c; }
.section-title { font-size: 1.15rem; font-weight: 700; color: #1e2a3a; margin: 0; }
.section-subtitle { font-size: 0.82rem; color: #6b7685; margin: 0; }

/* ===== Sequence Timeline ===== */
.step-row { display: flex; gap: 0.75rem; align-items: flex-start; margin-bottom: 0.6rem; }
.step-num {
    width: 28px; height: 28px; border-radius: 50%;
    background: rgba(14, 165, 233, 0.12); color: #0369a1;
    display: flex; align-items: center; justify-content: center;
    font-size: 0.8rem; font-weight: 600; flex-shrink: 0;
}
.step-delay { font-size: 0.75rem; color: #6b7685; }

/* ===== Mobile Preview ===== */
.mobile-frame { width: 320px; margin: 0 auto; background: #111827; border-radius: 24px; padding: 8px; }
.mobile-screen { background: #fff; border-radius: 18px; overflow: hidden; }
.mobile-header { display: flex; gap: 0.75rem; align-items: center; background: #f9fafb; padding: 1rem; border-bottom: 1px solid #e5e7eb; }
.mobile-avatar {
    width: 32px; height: 32px; border-radius: 50%; background: #0ea5e9; color: #fff;
    display: flex; align-items: center; justify-content: center; font-weight: 600; flex-shrink: 0;
}
.mobile-meta { min-width: 0; }
.mobile-sender, .mobile-subject { margin: 0; overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
.mobile-sender { font-size: 0.85rem; font-weight: 600; color: #111827; }
.mobile-subject { font-size: 0.75rem; color: #6b7280; }
.mobile-body { padding: 1rem; font-size: 0.85rem; color: #1f2937; line-height: 1.6; }

/* ===== Branded Header ===== */
.branded-header { display: flex; align-items: center; gap: 1rem; margin-bottom: 0.25rem; }
.brand-logo-mark {
    width: 52px; height: 52px; border-radius: 14px;
    background: linear-gradient(135deg, #0ea5e9, #a855f7);
    display: flex; align-items: center; justify-content: center;
    font-size: 1.6rem; font-weight: 800; color: #fff; flex-shrink: 0;
}
.brand-title { font-size: 1.7rem; font-weight: 800; color: #1e2a3a; margin: 0; }
.brand-subtitle { font-size: 0.92rem; color: #6b7685; margin: 0; }
.accent-divider {
    height: 3px; border-radius: 3px; margin: 0.75rem 0 1.25rem 0;
    background: linear-gradient(90deg, #0ea5e9, #a855f7, transparent);
}
</style>
""", unsafe_allow_html=True)


# --- SVG Icon Helpers ---
SVG_SPARKLES = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" stroke-width="2" stroke-linecap="round" stroke-linejoin="round"><path d="m12 3-1.9 5.8a2 2 0 0 1-1.3 1.3L3 12l5.8 1.9a2 2 0 0 1 1.3 1.3L12 21l1.9-5.8a2 2 0 0 1 1.3-1.3L21 12l-5.8-1.9a2 2 0 0 1-1.3-1.3z"/></svg>'
SVG_ENVELOPE = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" stroke-width="2" stroke-linecap="round" stroke-linejoin="round"><rect x="2" y="4" width="20" height="16" rx="2"/><path d="m22 7-8.97 5.7a1.94 1.94 0 0 1-2.06 0L2 7"/></svg>'
SVG_EYE = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" stroke-width="2" stroke-linecap="round" stroke-linejoin="round"><path d="M2 12s3-7 10-7 10 7 10 7-3 7-10 7-10-7-10-7z"/><circle cx="12" cy="12" r="3"/></svg>'

PREVIEW_MODE_LABELS = {
    PreviewMode.PREVIEW: "Preview",
    PreviewMode.HTML: "HTML",
    PreviewMode.MOBILE: "Mobile",
}


def section_header(title: str, subtitle: str, svg: str, color: str) -> str:
    """Return HTML for a styled section header with SVG icon."""
    return (
        f'<div class="section-header">'
        f'<div class="section-icon section-icon-{color}">{svg}</div>'
        f'<div><p class="section-title">{esc(title)}</p>'
        f'<p class="section-subtitle">{esc(subtitle)}</p></div>'
        f'</div>'
    )


def email_card(email: GeneratedEmail) -> str:
    """Compact summary card used in the email lists."""
    recipient = email.recipient_info
    return (
        f'<div class="email-card">'
        f'<p class="email-card-subject">{esc(email.subject)}'
        f'<span class="tag-pill">{esc(email.tone.value)}</span></p>'
        f'<p class="email-card-meta">To: {esc(recipient.name)} at {esc(recipient.company)}</p>'
        f'</div>'
    )


def init_session_state():
    """Initialize session state variables."""
    defaults = {
        "session": None,
        "selected_ids": [],
        "sequence_flash": None,
        "preview_mode": PreviewMode.PREVIEW,
    }
    for key, val in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = val
    if st.session_state["session"] is None:
        st.session_state["session"] = OutreachSession(config=CONFIG)


def get_session() -> OutreachSession:
    return st.session_state["session"]


def read_form() -> FormFields:
    """Render the generator form and return the entered values."""
    st.markdown("**Recipient Information**")
    col1, col2 = st.columns(2)
    with col1:
        recipient_name = st.text_input("Recipient Name", key="recipient_name")
        recipient_company = st.text_input("Company Name", key="recipient_company")
    with col2:
        recipient_role = st.text_input("Their Role/Title", key="recipient_role")
        industry = st.text_input("Industry", key="industry")

    st.markdown("**Your Information**")
    col3, col4 = st.columns(2)
    with col3:
        sender_name = st.text_input("Your Name", key="sender_name")
    with col4:
        sender_company = st.text_input("Your Company", key="sender_company")

    st.markdown("**Email Details**")
    purpose = st.text_input(
        "Purpose of Email",
        key="purpose",
        placeholder="e.g., Partnership opportunity, Product demo, Consultation",
    )
    pain_point = st.text_input(
        "Their Pain Point (optional)",
        key="pain_point",
        placeholder="e.g., Manual data entry, Low conversion rates",
    )
    value_proposition = st.text_area(
        "Your Value Proposition",
        key="value_proposition",
        placeholder="How can you help them solve their problem?",
        height=80,
    )

    tones = list(Tone)
    tone = st.radio(
        "Email Tone",
        options=tones,
        index=tones.index(CONFIG.default_tone),
        format_func=lambda t: f"{t.label}: {t.description}",
        horizontal=True,
        key="tone",
    )

    return FormFields(
        recipient_name=recipient_name,
        recipient_company=recipient_company,
        recipient_role=recipient_role,
        sender_name=sender_name,
        sender_company=sender_company,
        purpose=purpose,
        tone=tone,
        industry=industry,
        pain_point=pain_point,
        value_proposition=value_proposition,
    )


def render_generator_tab():
    """Render the email generator form and the list of generated emails."""
    session = get_session()
    col_form, col_list = st.columns(2)

    with col_form:
        st.markdown(
            section_header("Generate Email", "Fill in the details and let ColdCraft draft it", SVG_SPARKLES, "blue"),
            unsafe_allow_html=True,
        )
        fields = read_form()

        generate_clicked = st.button(
            "Generate Email",
            type="primary",
            use_container_width=True,
            disabled=session.is_generating or not fields.can_generate(),
        )
        if not fields.can_generate():
            st.caption("Recipient name and your name are required.")

        if generate_clicked:
            try:
                with st.spinner("Generating..."):
                    email = session.generate_sync(fields)
            except ColdCraftError as e:
                logger.warning(f"Generation rejected: {e}")
                st.error(str(e))
            else:
                st.success(f"Generated: \"{email.subject}\"")

    with col_list:
        st.markdown(
            section_header("Generated Emails", "Newest first. Click Preview to open one.", SVG_ENVELOPE, "purple"),
            unsafe_allow_html=True,
        )
        emails = session.list_emails()
        if not emails:
            st.info("No emails generated yet. Fill out the form and generate your first email.")
            return

        for email in emails:
            st.markdown(email_card(email), unsafe_allow_html=True)
            col_a, col_b = st.columns(2)
            with col_a:
                if st.button("Preview", key=f"select_{email.id}", use_container_width=True):
                    session.select_email(email.id)
                    st.toast("Selected. Open the Preview tab to view it.")
            with col_b:
                with st.popover("Copy", use_container_width=True):
                    st.code(render_plain_text(email), language=None)


def render_sequence_card(sequence: Sequence):
    """Render one sequence with its timeline in an expander."""
    label = f"{sequence.name} · {sequence.total_emails} emails · {sequence.total_days} days total"
    with st.expander(label):
        if sequence.description:
            st.caption(sequence.description)
        st.markdown(
            f'<span class="tag-pill status-{sequence.status.value}">{esc(sequence.status.value)}</span>',
            unsafe_allow_html=True,
        )
        for email in sequence.emails:
            when = "Immediate" if email.delay_days == 0 else f"Day {email.delay_days}"
            st.markdown(
                f'<div class="step-row">'
                f'<div class="step-num">{email.sequence_position}</div>'
                f'<div><div class="email-card-subject">{esc(email.subject)}</div>'
                f'<div class="step-delay">{when}</div></div>'
                f'</div>',
                unsafe_allow_html=True,
            )


def create_sequence_from_form():
    """Create Sequence callback. Runs before the rerun, so the form can be cleared."""
    session = get_session()
    try:
        sequence = session.create_sequence(
            st.session_state.get("sequence_name", ""),
            st.session_state.get("sequence_description", ""),
            st.session_state["selected_ids"],
        )
    except ColdCraftError as e:
        logger.warning(f"Sequence rejected: {e}")
        st.session_state["sequence_flash"] = ("error", f"Could not create sequence: {e}")
        return

    st.session_state["sequence_name"] = ""
    st.session_state["sequence_description"] = ""
    st.session_state["selected_ids"] = []
    st.session_state["sequence_flash"] = (
        "success",
        f"Created \"{sequence.name}\" with {sequence.total_emails} emails.",
    )


def render_sequences_tab():
    """Render the sequence builder and the list of saved sequences."""
    session = get_session()
    st.markdown(
        section_header("Email Sequences", "Order generated emails into a follow-up cadence", SVG_ENVELOPE, "green"),
        unsafe_allow_html=True,
    )

    emails = session.list_emails()
    with st.expander("New Sequence", expanded=not session.list_sequences()):
        name = st.text_input("Sequence Name", placeholder="e.g., SaaS Outreach Sequence", key="sequence_name")
        description = st.text_area(
            "Description",
            placeholder="Brief description of this sequence...",
            height=80,
            key="sequence_description",
        )

        st.markdown("**Select Emails** (click order = send order)")
        if not emails:
            st.info("No emails available. Generate some emails first.")

        selected = st.session_state["selected_ids"]
        for email in emails:
            position = selected.index(email.id) + 1 if email.id in selected else None
            marker = f"[{position}] " if position else ""
            if st.button(
                f"{marker}{email.subject}  ·  To: {email.recipient_info.name}",
                key=f"toggle_{email.id}",
                use_container_width=True,
                type="primary" if position else "secondary",
            ):
                st.session_state["selected_ids"] = toggle_selection(selected, email.id)
                st.rerun()

        st.button(
            "Create Sequence",
            type="primary",
            key="create_sequence",
            disabled=not name.strip() or not selected,
            on_click=create_sequence_from_form,
        )

        flash = st.session_state.pop("sequence_flash", None)
        if flash:
            kind, message = flash
            if kind == "success":
                st.success(message)
            else:
                st.error(message)

    sequences = session.list_sequences()
    if not sequences:
        st.info("No sequences yet. Create your first email sequence to get started.")
        return
    for sequence in sequences:
        render_sequence_card(sequence)


def render_preview_tab():
    """Render the selected email in preview, HTML or mobile mode."""
    session = get_session()
    st.markdown(
        section_header("Preview", "See the email the way your prospect will", SVG_EYE, "blue"),
        unsafe_allow_html=True,
    )

    emails = session.list_emails()
    current = session.selected_email()
    if current is None:
        st.info("No email selected. Generate an email or select one from your list to preview it here.")
        return

    ids = [e.id for e in emails]
    chosen_id = st.selectbox(
        "Email",
        options=ids,
        index=ids.index(current.id),
        format_func=lambda i: session.get_email(i).subject,
    )
    if chosen_id != current.id:
        current = session.select_email(chosen_id)

    mode = st.radio(
        "View",
        options=list(PreviewMode),
        format_func=lambda m: PREVIEW_MODE_LABELS[m],
        horizontal=True,
        key="preview_mode",
    )

    sender, recipient = current.sender_info, current.recipient_info
    col1, col2, col3 = st.columns(3)
    col1.markdown(f"**From:** {sender.name} ({sender.company})")
    col2.markdown(f"**To:** {recipient.name} ({recipient.company})")
    col3.markdown(f"**Tone:** {current.tone.label}")

    rendered = render(current, mode)
    if mode is PreviewMode.HTML:
        st.code(rendered, language="html")
    elif mode is PreviewMode.MOBILE:
        st.markdown(rendered, unsafe_allow_html=True)
    else:
        st.text(rendered)

    plain_text = render_plain_text(current)
    col_dl, col_save = st.columns(2)
    with col_dl:
        st.download_button(
            "Download .txt",
            data=plain_text,
            file_name=export_filename(current),
            mime="text/plain",
            use_container_width=True,
        )
    with col_save:
        if st.button("Save to export folder", use_container_width=True):
            path = save_text_export(current, CONFIG.export_dir)
            if path:
                st.success(f"Saved to {path}")
            else:
                st.warning("Could not save the export. See the logs for details.")


# --- Main App ---
def main():
    init_session_state()

    st.markdown(
        '<div class="branded-header">'
        '<div class="brand-logo-mark">C</div>'
        '<div>'
        '<p class="brand-title">ColdCraft</p>'
        '<p class="brand-subtitle">Cold emails and follow-up sequences in seconds</p>'
        '</div>'
        '</div>'
        '<div class="accent-divider"></div>',
        unsafe_allow_html=True,
    )

    tab1, tab2, tab3 = st.tabs(["Email Generator", "Sequences", "Preview"])

    with tab1:
        render_generator_tab()

    with tab2:
        render_sequences_tab()

    with tab3:
        render_preview_tab()


if __name__ == "__main__":
    main()
