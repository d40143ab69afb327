"""passaudit -- Streamlit web interface."""

import streamlit as st

from passaudit import BreachServiceError, Category, PasswordAuditor, load_settings

# ── Lucide icons (from lucide.dev) ────────────────────────────────────────

_LUCIDE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{s}" height="{s}" '
    'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round">{paths}</svg>'
)

ICON_SHIELD = _LUCIDE.format(s=32, paths=(
    '<path d="M20 13c0 5-3.5 7.5-7.66 8.95a1 1 0 0 1-.67-.01'
    'C7.5 20.5 4 18 4 13V6a1 1 0 0 1 1-1c2 0 4.5-1.2 6.24-2.72'
    'a1.17 1.17 0 0 1 1.52 0C14.51 3.81 17 5 19 5a1 1 0 0 1 1 1z"/>'
))

CATEGORY_STYLE = {
    Category.WEAK: ("Weak", "#d32f2f"),
    Category.MEDIUM: ("Medium", "#f57c00"),
    Category.STRONG: ("Strong", "#388e3c"),
    Category.VERY_STRONG: ("Very Strong", "#1b5e20"),
}


@st.cache_resource
def get_auditor() -> PasswordAuditor:
    """One auditor (and breach cache) shared by every session of the server."""
    return PasswordAuditor.from_settings(load_settings())


# ── Page config ───────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Password Audit",
    page_icon="\U0001f6e1️",
    layout="centered",
)

auditor = get_auditor()

st.markdown(
    f'<h1 style="display:flex;align-items:center;gap:10px">'
    f'{ICON_SHIELD} Password Audit</h1>',
    unsafe_allow_html=True,
)
st.caption(
    "Score a password and check it against known data breaches.  \n"
    "Your password is **NEVER** sent over the network - "
    "only the first 5 characters of its SHA-1 hash are sent "
    "([k-anonymity](https://en.wikipedia.org/wiki/K-anonymity))."
)

password = st.text_input(
    "Password",
    type="password",
    placeholder="Enter a password…",
    autocomplete="off",
)

if password:
    if len(password) > auditor.settings.max_length:
        st.error(f"Passwords are limited to {auditor.settings.max_length} characters.")
        st.stop()

    report = auditor.evaluate(password)
    label, color = CATEGORY_STYLE[report.category]
    st.markdown(
        f"**Strength:** <span style='color:{color}'>{label}</span>"
        f" &nbsp;·&nbsp; {report.score}/100"
        f" &nbsp;·&nbsp; {report.entropy} bits of entropy",
        unsafe_allow_html=True,
    )
    st.progress(report.score / 100)

    reqs = report.requirements
    cols = st.columns(5)
    checks = [
        (f"{auditor.settings.min_length}+ chars", reqs.length),
        ("Upper", reqs.uppercase),
        ("Lower", reqs.lowercase),
        ("Digit", reqs.numbers),
        ("Symbol", reqs.special_chars),
    ]
    for col, (name, ok) in zip(cols, checks):
        col.markdown(f"{'✅' if ok else '❌'} {name}")

    for w in report.warnings:
        st.warning(w, icon="⚠️")
    if report.suggestions:
        with st.expander("Suggestions"):
            for s in report.suggestions:
                st.markdown(f"- {s}")

    if auditor.checker.enabled and st.button("Check breach database", type="primary"):
        with st.spinner("Querying the breach range API…"):
            try:
                breach = auditor.check_breach(password)
            except BreachServiceError as exc:
                st.info(
                    f"**Could not determine breach status** ({exc.kind.value}). "
                    "Try again later."
                )
                st.stop()

        if breach.found:
            st.error(
                f"**Breached!** This password appeared **{breach.breach_count:,}** "
                f"time{'s' if breach.breach_count != 1 else ''} in known data "
                "breaches. Choose a password that hasn't been compromised."
            )
        else:
            st.success("**Safe!** Not found in any known data breaches.")
