"""
Streamlit Frontend for Budget Ledger

This is the screen people use to jot down income and expenses for the
month and see what is left.

DESIGN PRINCIPLES:
1. One form, two lists, one headline number
2. Every change redraws from the ledger, never from local copies
3. Clear messages when input is rejected
4. Undefined percentages show a placeholder, never "0%"

The UI only renders and wires events. All numbers come from the
BudgetController, which owns the ledger engine for this session.
"""

from datetime import date

import streamlit as st

from budget_ledger.config import get_settings
from budget_ledger.controller import BudgetController, BudgetView, create_app_components
from budget_ledger.models.entry import Entry, EntryKind, RawEntryInput
from budget_ledger.presentation import (
    format_amount,
    format_budget,
    format_month_label,
    format_percentage,
    item_dom_id,
)


# Page configuration
st.set_page_config(
    page_title="Budget Ledger",
    page_icon="💰",
    layout="wide",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
    .income-value {
        color: #28B9B5;
    }
    .expense-value {
        color: #FF5049;
    }
</style>
""", unsafe_allow_html=True)


def get_controller() -> BudgetController:
    """One ledger per browser session."""
    if "controller" not in st.session_state:
        controller, audit_logger = create_app_components()
        st.session_state.controller = controller
        st.session_state.audit_logger = audit_logger
    return st.session_state.controller


def main():
    """Main application entry point."""
    settings = get_settings()
    controller = get_controller()

    st.title(f"💰 Available budget in {format_month_label(date.today())}")

    if "last_message" in st.session_state:
        st.info(st.session_state.pop("last_message"))

    render_budget_header(controller.current_view(), settings.currency_symbol,
                         settings.percentage_placeholder)
    st.markdown("---")
    render_add_form(controller)
    st.markdown("---")
    render_lists(controller, settings.currency_symbol, settings.percentage_placeholder)
    render_history(settings.audit_history_size)


def render_budget_header(view: BudgetView, currency: str, placeholder: str):
    """Budget headline plus income and expense totals."""
    snapshot = view.snapshot

    st.markdown(
        f'<div class="big-number">{format_budget(snapshot.budget, currency)}</div>',
        unsafe_allow_html=True,
    )

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Income", format_amount(snapshot.total_income, EntryKind.INCOME, currency))
    with col2:
        st.metric("Expenses", format_amount(snapshot.total_expense, EntryKind.EXPENSE, currency))
    with col3:
        st.metric("Spent", format_percentage(snapshot.overall_percentage, placeholder))


def render_add_form(controller: BudgetController):
    """The input form. Submitting runs the full add flow."""
    with st.form("add_item", clear_on_submit=True):
        col1, col2, col3 = st.columns([1, 3, 2])
        with col1:
            kind = st.selectbox(
                "Type",
                options=list(EntryKind),
                format_func=lambda k: "+" if k is EntryKind.INCOME else "-",
            )
        with col2:
            description = st.text_input("Add description")
        with col3:
            value = st.text_input("Value", help="A negative value switches income and expense")

        submitted = st.form_submit_button("✔ Add", type="primary")

    if submitted:
        outcome = controller.add_item(
            RawEntryInput(kind=kind, description=description, value=value)
        )
        if outcome.added:
            if outcome.validation.issues:
                st.session_state.last_message = outcome.message
            st.rerun()
        else:
            st.error(outcome.message)


def _delete(controller: BudgetController, item_id: str):
    controller.delete_item(item_id)


def render_entry_row(
    controller: BudgetController,
    entry: Entry,
    currency: str,
    percentage: str = "",
):
    col1, col2, col3, col4 = st.columns([4, 2, 1, 1])
    with col1:
        st.write(entry.description)
    with col2:
        css = "income-value" if entry.kind is EntryKind.INCOME else "expense-value"
        st.markdown(
            f'<span class="{css}">{format_amount(entry.value, entry.kind, currency)}</span>',
            unsafe_allow_html=True,
        )
    with col3:
        if percentage:
            st.write(percentage)
    with col4:
        item_id = item_dom_id(entry)
        st.button(
            "✖",
            key=f"delete-{item_id}",
            on_click=_delete,
            args=(controller, item_id),
        )


def render_lists(controller: BudgetController, currency: str, placeholder: str):
    """Income on the left, expenses with their share of income on the right."""
    view = controller.current_view()
    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Income")
        if not view.income:
            st.caption("No income recorded yet.")
        for entry in view.income:
            render_entry_row(controller, entry, currency)

    with col2:
        st.subheader("Expenses")
        if not view.expenses:
            st.caption("No expenses recorded yet.")
        for entry, percentage in zip(view.expenses, view.expense_percentages):
            render_entry_row(
                controller,
                entry,
                currency,
                percentage=format_percentage(percentage, placeholder),
            )


def render_history(limit: int):
    """Recent audit events for this session, newest first."""
    audit_logger = st.session_state.get("audit_logger")
    if audit_logger is None or audit_logger.sink is None:
        return

    with st.expander("🕘 History"):
        events = audit_logger.sink.recent_events(limit)
        if not events:
            st.caption("Nothing has happened yet.")
        for event in events:
            st.markdown(
                f"`{event.timestamp:%H:%M:%S}` **{event.event_type.value}** {event.description}"
            )


if __name__ == "__main__":
    main()
