import streamlit as st

GLOBAL_CSS = """
<style>
.block-container {
    padding-top: 1.5rem;
}

.fc-hero {
  display:flex;
  align-items:center;
  gap:16px;
  padding:18px 22px;
  border-radius:18px;
  color:white;
  background:linear-gradient(90deg,#2563eb 0%, #3b82f6 100%);
  margin-bottom:14px;
}
.fc-hero h1 { font-size:28px; margin:0; color:white; }
.fc-hero p { margin:0; opacity:.9; }

.fc-card {
  border-radius:18px;
  padding:14px 18px;
  background:#ffffff;
  border:1px solid rgba(0,0,0,0.08);
  margin-bottom:12px;
}

.fc-avatar {
  width:40px; height:40px; border-radius:50%; background:#dbeafe; color:#1e3a8a;
  display:inline-grid; place-items:center; font-weight:800; margin-right:10px;
}

.fc-bar-wrap { width:100%; background:#f1f5f9; border-radius:8px; overflow:hidden; }
.fc-bar {
  height:26px; border-radius:8px; color:white; font-weight:800;
  text-align:center; line-height:26px; min-width:2.5rem;
}

.fc-hist { font-size:13px; color:#475569; padding:4px 0; }

.val-ok   { color:#15803d; }
.val-mod  { color:#ca8a04; }
.val-high { color:#ea580c; }
.val-sev  { color:#dc2626; }
</style>
"""


def inject() -> None:
    st.markdown(GLOBAL_CSS, unsafe_allow_html=True)
