# apps/streamlit_app/Home.py
import streamlit as st
import pandas as pd

# --- make the project root importable on Streamlit Cloud ---
import sys, os
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)
# -----------------------------------------------------------

from qslp.calculator import compute
from qslp.limits import MIN_AGE, MAX_AGE
from qslp.log import configure_logging
from qslp.participation import simulate_participation
from qslp.projection import growth_table
from qslp.rules import rule_options, get_schedule
from qslp.settings import get_settings
from qslp import wizard
from qslp.wizard import Section

settings = get_settings()
configure_logging(settings.log_level)

# -------------------------------------------------
# App configuration
# -------------------------------------------------
st.set_page_config(page_title=settings.page_title, layout="centered")
st.set_option("client.showErrorDetails", settings.show_error_details)


def fmt_money(amount) -> str:
    return f"${amount:,.0f}"


if "wizard" not in st.session_state:
    st.session_state.wizard = wizard.restart()
    st.session_state.result = None
    st.session_state.participation = None

state = st.session_state.wizard


def _go(new_state):
    st.session_state.wizard = new_state
    st.rerun()


# ===============================
# LANDING
# ===============================
if state.section == Section.LANDING:
    st.title("Calculate Your Student Loan Retirement Match")
    st.write("Turn your student loan payments into retirement savings. The SECURE 2.0 Act allows "
             "employers to match your student loan payments as if they were 401(k) contributions.")
    st.caption("🛡️ SECURE 2.0 Act Compliant")

    if st.button("Calculate My Match", type="primary", key="start"):
        _go(wizard.start(state))

    st.subheader("How it works")
    c1, c2, c3 = st.columns(3)
    c1.markdown("**1.** Answer a few questions about your salary and loans")
    c2.markdown("**2.** We apply your employer's match formula")
    c3.markdown("**3.** See your match and its growth to retirement")

# ===============================
# FORM
# ===============================
elif state.section == Section.FORM:
    step = state.current
    h1, h2 = st.columns([3, 1])
    with h1:
        st.header("QSLP Calculator")
    with h2:
        st.caption(f"Step {state.step} of {wizard.TOTAL_STEPS}")
    st.progress(wizard.progress(state))

    st.subheader(step.title)
    current = getattr(state.answers, step.field)
    key = f"step_{step.field}"

    if step.kind == "currency":
        raw = st.text_input(f"{step.label} ($)", value=f"{int(current):,}", help=step.help, key=key)
        value = wizard.parse_currency(raw)
    elif step.kind == "age":
        ages = list(range(MIN_AGE, MAX_AGE)) + [MAX_AGE]
        value = st.selectbox(step.label, ages, index=ages.index(current) if current in ages else 0,
                             format_func=lambda a: "65+" if a == MAX_AGE else str(a),
                             help=step.help, key=key)
    elif step.kind == "rule":
        opts = rule_options()
        values = [v for v, _ in opts]
        labels = dict(opts)
        value = st.selectbox(step.label, values,
                             index=values.index(current) if current in values else None,
                             format_func=lambda v: labels[v],
                             placeholder="Select your employer's match rule",
                             help=step.help, key=key) or ""
    else:
        value = st.radio(step.label, [True, False], index=0 if current else 1,
                         format_func=lambda b: "Yes, my employer offers QSLP matching" if b
                         else "No, or I'm not sure",
                         help=step.help, key=key)

    err = state.errors.get(step.field)
    if err:
        st.error(err)

    b1, b2 = st.columns(2)
    with b1:
        if st.button("Back to Start" if state.step == 1 else "Previous", key="previous"):
            _go(wizard.go_back(state))
    with b2:
        if st.button("Calculate Results" if state.is_last_step else "Next", type="primary", key="next"):
            new_state = wizard.submit_step(state, value)
            if new_state.section == Section.RESULTS:
                try:
                    st.session_state.result = compute(wizard.to_match_input(new_state.answers))
                    st.session_state.participation = simulate_participation()
                except Exception as e:
                    st.error("Calculation failed. Details below.")
                    st.exception(e)
                    st.stop()
            _go(new_state)

# ===============================
# RESULTS
# ===============================
else:
    res = st.session_state.result
    answers = state.answers
    sched = get_schedule(answers.employer_match_rule)

    st.title("Your QSLP Results")
    st.write("Here's how your student loan payments can boost your retirement savings")

    st.info(f"**SECURE 2.0 Act Compliant Calculation** — match rule: {sched.label} "
            f"(matches loan payments up to {sched.max_match_pct:.0%} of salary). "
            f"2025 IRS contribution limit applied ({fmt_money(res.contribution_limit)} annual limit).")

    m1, m2, m3 = st.columns(3)
    m1.metric("Monthly Match Eligible", fmt_money(res.monthly_match),
              help=f"Based on your {fmt_money(answers.monthly_loan_payment)} loan payment")
    m2.metric("30-Year Growth", fmt_money(res.thirty_year_projection), help="Assuming 7% annual return")
    part = st.session_state.participation
    if settings.show_participation and part is not None:
        m3.metric("Company Participation (simulated)", part.participants,
                  help="Simulated figure for illustration only; not real company data")

    st.subheader("🎯 QSLP Match Tier Breakdown")
    t1, t2, t3 = st.columns(3)
    t1.metric(f"Tier 1 ({sched.tier1_rate:.0%} up to {sched.tier1_threshold:.0%})", fmt_money(res.tier1_match))
    if sched.tier2_rate > 0:
        t2.metric(f"Tier 2 ({sched.tier2_rate:.0%} from {sched.tier1_threshold:.0%} "
                  f"to {sched.tier2_threshold:.0%})", fmt_money(res.tier2_match))
    t3.metric("Total Annual Match", fmt_money(res.annual_match))
    st.caption(f"**Loan Payments Used:** {fmt_money(res.total_loan_payments_used)} of "
               f"{fmt_money(answers.monthly_loan_payment * 12)} annual payments")

    st.subheader("📈 30-Year Compound Growth Projection")
    st.line_chart(growth_table(res.monthly_match, settings.chart_years), x="Year", y="Portfolio Value")

    st.subheader("Complete Calculation Breakdown")
    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**Input Parameters**")
        st.table(pd.Series({
            "Annual Salary": fmt_money(answers.annual_salary),
            "Monthly Loan Payment": fmt_money(answers.monthly_loan_payment),
            "Total Student Debt": fmt_money(answers.total_student_debt_balance),
            "Annual Loan Payments": fmt_money(answers.monthly_loan_payment * 12),
            "Current 401(k) Contribution": f"{fmt_money(answers.current_401k_contribution * 12)}/year",
            "Age": "65+" if answers.age == MAX_AGE else str(answers.age),
        }, name="Value").to_frame())
    with c2:
        st.markdown("**QSLP Match Results**")
        st.table(pd.Series({
            "Tier 1 Match": fmt_money(res.tier1_match),
            "Tier 2 Match": fmt_money(res.tier2_match),
            "Total Annual Match": fmt_money(res.annual_match),
            "Monthly Match": fmt_money(res.monthly_match),
        }, name="Value").to_frame())

    st.markdown(f"**Contribution Limit Used by Match:** {res.contribution_usage_percent}%")
    st.progress(min(1.0, res.contribution_usage))

    remaining_frac = res.remaining_capacity / res.contribution_limit
    st.markdown(f"**IRS Contribution Limit Remaining:** {round(remaining_frac * 100)}%")
    st.progress(min(1.0, max(0.0, remaining_frac)))
    st.caption(f"{fmt_money(res.remaining_capacity)} remaining capacity "
               f"(2025 limit: {fmt_money(res.contribution_limit)})")

    if answers.has_qslp_matching:
        st.success("**QSLP Available** — your employer offers QSLP matching; you can start benefiting immediately!")
    else:
        st.warning("**QSLP Not Available** — your employer doesn't offer QSLP yet. "
                   "Consider discussing this benefit with your HR department.")

    st.warning("📅 **Important: Annual Certification Required.** To receive QSLP matching, you must "
               "certify your student loan payments annually with your employer. This typically involves "
               "providing loan statements or payment records to HR. Set a calendar reminder for next year!")

    if st.button("Calculate Again", type="primary", key="restart"):
        st.session_state.result = None
        st.session_state.participation = None
        _go(wizard.restart())
