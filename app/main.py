"""
Streamlit Frontend for Ledgerly

Small business owners type what happened ("Paid rent 5000 incl 18% gst")
and get the accounting done for them.

The UI enforces the human-in-the-loop principle:
- User sees how the entry was understood and posted
- Nothing is confirmed without an explicit "Confirm" action
- Entries live only in this session; storage belongs elsewhere
"""

import streamlit as st

from ledgerly.config import validate_all_settings
from ledgerly.errors import AmountNotFoundError, ConfigurationGapError, InvalidStatusTransitionError
from ledgerly.models import AccountType, BusinessContext, TransactionEvent, TransactionStatus
from ledgerly.observability import create_correlation_id
from ledgerly.pipeline import SmartEntryPipeline, create_pipeline


# Page configuration
st.set_page_config(
    page_title="Ledgerly",
    page_icon="📒",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_pipeline() -> SmartEntryPipeline:
    """Get or create the smart entry pipeline (cached)."""
    return create_pipeline()


def main():
    """Main application entry point."""
    pipeline = get_pipeline()

    if "transactions" not in st.session_state:
        st.session_state.transactions = []
    if "pending" not in st.session_state:
        st.session_state.pending = None

    st.sidebar.title("📒 Ledgerly")
    st.sidebar.markdown("---")

    business_id = st.sidebar.text_input("Business ID", value="biz-default")

    page = st.sidebar.radio(
        "Navigate to:",
        ["✍️ Smart Entry", "📚 Transactions", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        """
        **Try entries like:**
        - "Paid rent 5000"
        - "Received 10000 from client via UPI"
        - "Paid rent 5000 incl 18% gst"
        """
    )

    if page == "✍️ Smart Entry":
        render_entry_page(pipeline, business_id)
    elif page == "📚 Transactions":
        render_transactions_page()
    elif page == "⚙️ Settings":
        render_settings_page(pipeline)


def render_postings(event: TransactionEvent):
    """Show the journal entries of a transaction as a table."""
    rows = [
        {
            "Account": entry.account,
            "Debit (₹)": f"{entry.debit:,}" if entry.debit else "",
            "Credit (₹)": f"{entry.credit:,}" if entry.credit else "",
        }
        for entry in event.entries
    ]
    rows.append({
        "Account": "Total",
        "Debit (₹)": f"{event.total_debit:,}",
        "Credit (₹)": f"{event.total_credit:,}",
    })
    st.table(rows)


def render_entry_page(pipeline: SmartEntryPipeline, business_id: str):
    """Render the smart entry page."""
    st.title("✍️ Smart Entry")
    st.markdown("Describe the transaction in your own words.")

    text = st.text_input("What happened?", placeholder="Paid rent 5000 incl 18% gst")

    if st.button("🧠 Post Entry", type="primary", disabled=not text.strip()):
        if not business_id.strip():
            st.error("Please enter a Business ID in the sidebar.")
            st.stop()
        try:
            event = pipeline.interpret_and_post(
                text,
                BusinessContext(business_id=business_id),
                correlation_id=create_correlation_id(),
            )
        except AmountNotFoundError:
            st.error("I couldn't find an amount in that entry. Please include a number, e.g. 'Paid rent 5000'.")
            st.stop()
        except ConfigurationGapError as e:
            st.error(f"This kind of entry isn't set up yet: {e}")
            st.stop()
        st.session_state.pending = event

    event = st.session_state.pending
    if event is None:
        return

    st.markdown("---")
    st.subheader("📋 Review Posting")

    col1, col2, col3 = st.columns(3)
    col1.metric("Type", event.account_type.value)
    col2.metric("Category", event.category)
    col3.metric("Paid via", event.mode.value)

    col1, col2, col3 = st.columns(3)
    col1.metric("Base (₹)", f"{event.tax.base:,}")
    col2.metric(f"GST @ {event.gst_rate}%", f"{event.tax.tax:,}")
    col3.metric("Total (₹)", f"{event.tax.total:,}")

    validator = pipeline.validator
    summary = validator.get_user_friendly_summary(validator.validate(event, event.entries))
    if event.warnings:
        st.warning(summary)
    else:
        st.success(summary)

    render_postings(event)

    col1, col2 = st.columns(2)
    with col1:
        if event.status == TransactionStatus.DRAFT:
            if st.button("✅ Confirm", type="primary"):
                try:
                    confirmed = event.confirmed()
                except InvalidStatusTransitionError as e:
                    st.error(str(e))
                    st.stop()
                st.session_state.transactions.insert(0, confirmed)
                st.session_state.pending = None
                st.success("Entry confirmed.")
                st.rerun()
        elif st.button("💾 Keep", type="primary"):
            st.session_state.transactions.insert(0, event)
            st.session_state.pending = None
            st.rerun()
    with col2:
        if st.button("🗑️ Discard"):
            st.session_state.pending = None
            st.rerun()


def render_transactions_page():
    """Render the list of entries made in this session."""
    st.title("📚 Transactions")

    transactions: list[TransactionEvent] = st.session_state.transactions
    if not transactions:
        st.info("📋 Your entries will appear here once you post them.")
        return

    for event in transactions:
        with st.expander(
            f"{event.transaction_date.isoformat()} · {event.category} · ₹{event.tax.total:,} · {event.status.value}"
        ):
            st.caption(event.raw_text)
            render_postings(event)


def render_settings_page(pipeline: SmartEntryPipeline):
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()

    sections = [
        ("Engine", "engine"),
        ("Validation thresholds", "validation"),
        ("Application", "app"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("### Chart of Accounts")
    for account_type in AccountType:
        names = pipeline.chart.accounts_for(account_type)
        st.markdown(f"**{account_type.value}:** {', '.join(names)}")

    st.markdown("---")
    st.markdown(
        "Settings are read from environment variables or a `.env` file "
        "(prefixes `LEDGERLY_ENGINE_` and `LEDGERLY_VALIDATION_`)."
    )


if __name__ == "__main__":
    main()
