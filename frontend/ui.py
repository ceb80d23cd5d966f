import streamlit as st

_MOBILE_CSS = """
<style>
.block-container{
  max-width: 480px !important;
  padding-bottom: 88px !important; /* 하단 탭바 공간 */
}

:root{
  --txt:#1f2937; --muted:#6b7280; --border:#e5e7eb; --panel:#f9fafb;
  --brand:#0f172a; --brand2:#1f2937;
}
html, body, [data-baseweb="baseweb"]{
  font-family: -apple-system, BlinkMacSystemFont, "Noto Sans KR", system-ui, Segoe UI, Roboto, Arial, sans-serif;
  color: var(--txt);
}

.caption {font-size: 12px; color: var(--muted); margin: 0;}

/* 상단 앱바 */
.appbar{
  position: sticky; top:0; z-index:50;
  background: var(--brand); color:#e5e7eb; border-bottom:1px solid #111827;
  padding: 10px 14px; margin: -10px -10px 8px -10px; font-weight:800; font-size:18px; text-align:center;
}

/* 하단 탭바(고정) */
.mobile-tabbar{
  position: fixed; left:0; right:0; bottom:0; z-index:60;
  background: var(--brand); border-top:1px solid #111827; padding:8px 8px 10px;
}
.mobile-tabbar__inner{ max-width: 480px; margin:0 auto; }
.tab-btn{
  border-radius:12px; font-weight:800; font-size:14px; padding:0; overflow:hidden;
  background:#111827; color:#cbd5e1; border: none;
}
.tab-btn.active{ background: var(--brand2); color:#e5e7eb; }

#MainMenu, header, footer {visibility:hidden;}
</style>
"""


def app_shell(title: str, active: str = "upload"):
    """
    active: 'upload' | 'analyze'
    - 각 페이지 파일 상단에서 st.set_page_config(...) 먼저 호출할 것
    """
    st.markdown(_MOBILE_CSS, unsafe_allow_html=True)
    st.markdown(f"<div class='appbar'>{title}</div>", unsafe_allow_html=True)

    with st.container():
        st.markdown("<div class='mobile-tabbar'><div class='mobile-tabbar__inner'>", unsafe_allow_html=True)
        c1, c2 = st.columns(2)

        def _tab(label, page_path, is_active):
            btn_class = "tab-btn active" if is_active else "tab-btn"
            st.markdown(f"<div class='{btn_class}'>", unsafe_allow_html=True)
            st.page_link(page_path, label=label, use_container_width=True)
            st.markdown("</div>", unsafe_allow_html=True)

        with c1: _tab("📤 업로드", "Home.py", active == "upload")
        with c2: _tab("🔎 분석", "pages/1_분석.py", active == "analyze")


def page_header(title: str, emoji: str = "🍽️"):
    st.markdown(f"<h2 style='margin:8px 0 0 0'>{emoji} {title}</h2>", unsafe_allow_html=True)


def show_json(data):
    with st.expander("자세히 보기 (JSON)", expanded=False):
        st.json(data)


def food_item_card(name: str, grams):
    with st.container(border=True):
        c1, c2 = st.columns([3, 2])
        c1.markdown(f"**{name}**")
        c2.metric("추정 중량(g)", "알 수 없음" if grams is None else f"{grams:g}")
