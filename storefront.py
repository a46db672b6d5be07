"""
Shop'reneur Mağaza Arayüzü
Çalıştır: streamlit run storefront.py
"""
from __future__ import annotations

import base64
import sys
import time
from dataclasses import replace
from pathlib import Path

import plotly.express as px
import streamlit as st
import streamlit.components.v1 as components

# Proje importları - hem lokal hem Streamlit Cloud'da çalışır
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from engine.checkout import CheckoutError, CheckoutStage
from engine.inventory import (
    STAGE_LABELS,
    InventoryStage,
    compute_inventory,
    shopper_offer,
    summarize_inventory,
)
from engine.messages import last_message
from engine.session import StorefrontSession
from models.product import Platform, Product, ProductCategory
from models.shop import Role, ShopSettings
from scraper.amazon_lookup import lookup_asin
from scripts.seed_demo import seed
from services.ai_content import (
    AIContentError,
    MentorChat,
    generate_product_description,
    generate_product_image,
    generate_try_on_image,
    scan_trend_challenges,
    search_trending_products,
)
from sync.store import MemoryStore, create_store

# ── Sayfa Ayarları ────────────────────────────────────────
st.set_page_config(
    page_title="Shop'reneur",
    page_icon="🛍️",
    layout="wide",
    initial_sidebar_state="expanded",
)

STAGE_BADGES = {
    InventoryStage.WISHLIST: "🔒 Incubator Phase",
    InventoryStage.DEMO_UNIT: "📦 Stock Required (1/2)",
    InventoryStage.NEEDS_REVIEW: "🎬 Action Required: Review",
    InventoryStage.SELLABLE: "✅ Enterprise Grade",
}

PRODUCT_FORM_DEFAULTS = {
    "pf_name": "",
    "pf_price": 0.0,
    "pf_cost": 0.0,
    "pf_category": ProductCategory.FASHION.value,
    "pf_platform": Platform.AMAZON.value,
    "pf_asin": "",
    "pf_link": "https://amazon.com",
    "pf_keywords": "",
    "pf_description": "",
    "pf_image": "",
}


# ── Depo & Oturum (süreç başına tek depo) ────────────────
@st.cache_resource
def get_store():
    store = create_store()
    if isinstance(store, MemoryStore) and store.is_empty():
        seed(store)
    return store


def get_session() -> StorefrontSession:
    if "session" not in st.session_state:
        st.session_state["session"] = StorefrontSession(get_store())
    return st.session_state["session"]


def open_in_new_tab(url: str) -> None:
    components.html(f"<script>window.open({url!r}, '_blank');</script>", height=0)


def main():
    # Abonelikler sadece bu tur boyunca açık
    session = get_session()
    with session.live():
        render_page(session)


def render_page(session: StorefrontSession):
    store = session.store
    if session.current_user is None:
        render_profile_picker(session)
        return

    with st.sidebar:
        st.title(f"🛍️ {session.settings.store_name}")
        st.caption(session.settings.tagline)
        st.divider()

        user = session.current_user
        st.write(f"**{user.name}** · {user.role.value}")

        pages = ["The Hub", "Messages", "Virtual Try-On", "Trend Scout"]
        if session.is_owner:
            pages.append("Portal")
        page = st.radio("Page", pages, index=0)

        if st.button("Switch User"):
            session.sign_out()
            st.rerun()

        st.divider()
        render_cart(session)

        st.divider()
        if store.is_remote and store.connected:
            st.caption("🟢 Platform Sync Active")
        elif store.is_remote:
            st.caption("🔴 Sync Interrupted")
        else:
            st.caption("🟡 Demo mode (in-memory store)")

    if page == "The Hub":
        render_shop(session)
    elif page == "Messages":
        render_messages(session)
    elif page == "Virtual Try-On":
        render_try_on(session)
    elif page == "Trend Scout":
        render_trends(session)
    elif page == "Portal":
        render_admin(session)


# ══════════════════════════════════════════════════════════
#  PROFİL SEÇİMİ
# ══════════════════════════════════════════════════════════
def render_profile_picker(session: StorefrontSession):
    st.title("Welcome to the Org Portal")
    st.caption("Who is accessing the platform today?")

    if not session.initialized:
        st.info("Connecting to the organization cloud...")
        return

    cols = st.columns(3)
    for i, profile in enumerate(session.profiles):
        with cols[i % 3]:
            st.image(profile.avatar_url, width=64)
            if st.button(f"{profile.name} · {profile.role.value}", key=f"pick_{profile.id}"):
                session.switch_user(profile.id)
                st.rerun()

    st.divider()
    with st.form("new_member"):
        st.subheader("Add New Member")
        name = st.text_input("Name")
        role = st.selectbox("Role", [r.value for r in Role if r != Role.DAUGHTER])
        if st.form_submit_button("Join") and name.strip():
            if session.create_profile(name.strip(), Role(role)) is None:
                st.error("Could not create the profile. Please try again.")
            else:
                st.rerun()


# ══════════════════════════════════════════════════════════
#  MAĞAZA
# ══════════════════════════════════════════════════════════
def render_shop(session: StorefrontSession):
    settings = session.settings
    st.title(settings.hero_headline)
    st.caption(settings.hero_subtext)

    if not session.products:
        st.info("The hub is empty. The founder is curating the first products.")
        return

    cols = st.columns(4)
    for i, product in enumerate(session.products):
        with cols[i % 4]:
            render_product_card(session, product)


def render_product_card(session: StorefrontSession, product: Product):
    status = compute_inventory(product)
    offer = shopper_offer(product)

    with st.container(border=True):
        if product.image_url:
            st.image(product.image_url, use_container_width=True)
        st.caption(f"{product.platform.value} · {product.category.value}")
        st.markdown(f"**{product.name}** - ${product.price:,.2f}")
        st.caption(STAGE_BADGES[status.stage])
        if product.description:
            st.write(product.description[:140])
        if product.video_url:
            st.link_button("▶ Review", product.video_url)

        if status.needs_review and session.is_owner:
            video = st.text_input("Review video URL", key=f"video_{product.id}")
            if st.button("Upload Video Review", key=f"upload_{product.id}") and video.strip():
                session.attach_review_video(product.id, video.strip())
                st.rerun()
        else:
            if st.button(offer.label, key=f"offer_{product.id}", use_container_width=True):
                session.add_to_cart(product.id, offer.order_type)
                st.toast(f"Added {product.name} to the bag")
                st.rerun()

        if offer.hint:
            st.caption(offer.hint)
        if status.can_sell:
            st.caption(f"{status.sellable_stock} available")

        if session.is_owner:
            if st.button("🗑 Retire", key=f"delete_{product.id}"):
                session.delete_product(product.id)
                st.rerun()


# ══════════════════════════════════════════════════════════
#  SEPET & CHECKOUT
# ══════════════════════════════════════════════════════════
def render_cart(session: StorefrontSession):
    cart = session.cart
    checkout = session.checkout
    st.subheader(f"🛒 Bag ({len(cart)})")

    if checkout.stage == CheckoutStage.SUCCESS:
        st.success("Inventory Locked! The assets have been logged. Founders will be notified once items arrive.")
        if st.button("Return to Hub"):
            session.new_checkout()
            st.rerun()
        return

    if cart.is_empty():
        st.caption("Acquisition list is empty.")
        return

    gifts, purchases = cart.indexed_partition()
    for title, items in (("🎁 Gifts (stock the shop)", gifts), ("🛍 Direct Purchase", purchases)):
        if not items:
            continue
        st.caption(title)
        for idx, item in items:
            c1, c2 = st.columns([4, 1])
            c1.write(f"{item.product.name[:28]} · ${item.line_total:,.2f}")
            if checkout.stage == CheckoutStage.CART:
                if c2.button("✕", key=f"rm_{idx}_{item.id}"):
                    session.remove_cart_line(idx)
                    st.rerun()

    st.metric("Total", f"${cart.total():,.2f}")

    if checkout.stage == CheckoutStage.CART:
        if st.button("Sync to Amazon", type="primary", use_container_width=True):
            try:
                checkout.begin()
                with st.spinner("Compiling batch cart data..."):
                    checkout.transfer(opener=open_in_new_tab, sleep=time.sleep)
            except CheckoutError as e:
                st.error(str(e))
            st.rerun()

    elif checkout.stage == CheckoutStage.CONFIRM:
        st.info("Once the transaction is finalized on Amazon, update the incubator status here.")
        if checkout.batch_url:
            st.link_button("Open Amazon cart", checkout.batch_url, use_container_width=True)
        if st.button("Verify Purchase", type="primary", use_container_width=True):
            session.confirm_checkout()
            st.rerun()
        if st.button("Go back", use_container_width=True):
            checkout.go_back()
            st.rerun()


# ══════════════════════════════════════════════════════════
#  MESAJLAR
# ══════════════════════════════════════════════════════════
def render_messages(session: StorefrontSession):
    st.title("Messages")
    contacts = session.other_profiles()
    if not contacts:
        st.info("No other members yet.")
        return

    def contact_label(profile_id):
        profile = session.find_profile(profile_id)
        last = last_message(session.messages, session.current_user.id, profile_id)
        preview = f" - {last.text[:30]}" if last else ""
        return f"{profile.name}{preview}"

    other_id = st.selectbox("Conversation", [p.id for p in contacts], format_func=contact_label)

    for m in session.conversation_with(other_id):
        role = "user" if m.sender_id == session.current_user.id else "assistant"
        with st.chat_message(role):
            st.write(m.text)

    with st.form("send_message", clear_on_submit=True):
        text = st.text_input("Message")
        if st.form_submit_button("Send") and text.strip():
            session.send_message(text, other_id)
            st.rerun()

    if st.button("Erase conversation"):
        session.erase_conversation(other_id)
        st.rerun()


# ══════════════════════════════════════════════════════════
#  SANAL DENEME
# ══════════════════════════════════════════════════════════
def render_try_on(session: StorefrontSession):
    st.title("Virtual Try-On")
    if not session.products:
        st.info("No products to try on yet.")
        return

    product_id = st.selectbox(
        "Product",
        [p.id for p in session.products],
        format_func=lambda pid: session.find_product(pid).name,
    )
    photo = st.file_uploader("Your photo", type=["png", "jpg", "jpeg", "webp"])

    if photo is not None:
        st.image(photo, width=240)
        if st.button("Try it on", type="primary"):
            product = session.find_product(product_id)
            user_image = base64.b64encode(photo.getvalue()).decode("ascii")
            try:
                with st.spinner("Styling your look..."):
                    result = generate_try_on_image(
                        user_image, product.name, product.category.value, product.description
                    )
            except AIContentError as e:
                st.error(f"Try-on failed: {e}")
                return
            if result:
                st.image(result, caption=product.name)
            else:
                st.warning("The model did not return an image. Try another photo.")


# ══════════════════════════════════════════════════════════
#  TREND TARAYICI
# ══════════════════════════════════════════════════════════
def render_trends(session: StorefrontSession):
    st.title("Trend Scout")

    query = st.text_input("Search trending products", placeholder="e.g. summer skincare")
    if st.button("Scout") and query.strip():
        with st.spinner("Scanning..."):
            st.session_state["trend_results"] = search_trending_products(query.strip())

    results = st.session_state.get("trend_results")
    if results is not None:
        if not results:
            st.warning("No ideas found right now. Try again later.")
        for idea in results:
            with st.container(border=True):
                st.markdown(f"**{idea['name']}** - ${idea['price']:,.2f}")
                st.caption(f"{idea['category']} · {idea['keywords']}")
                st.write(idea["description"])

    st.divider()
    if st.button("Scan the socials"):
        with st.spinner("Scanning the socials..."):
            st.session_state["challenges"] = scan_trend_challenges()

    for c in st.session_state.get("challenges", []):
        st.info(f"**{c.title}** ({c.platform}, {c.difficulty}, +{c.xp_reward} XP)\n\n{c.description}")


# ══════════════════════════════════════════════════════════
#  YÖNETİM PORTALI
# ══════════════════════════════════════════════════════════
def _init_product_form():
    for key, value in PRODUCT_FORM_DEFAULTS.items():
        st.session_state.setdefault(key, value)


def _on_magic_write():
    name = st.session_state["pf_name"]
    if not name:
        return
    st.session_state["pf_description"] = generate_product_description(
        name, st.session_state["pf_category"], st.session_state["pf_keywords"] or "high-end professional"
    )


def _on_generate_image():
    name = st.session_state["pf_name"]
    if not name:
        return
    image = generate_product_image(
        name,
        st.session_state["pf_category"],
        st.session_state["pf_description"] or "Professional Enterprise Product",
    )
    if image:
        st.session_state["pf_image"] = image
    else:
        st.session_state["pf_error"] = "Image generation failed. Try again or paste an image URL."


def _on_lookup_asin():
    listing = lookup_asin(st.session_state["pf_asin"])
    if listing is None:
        st.session_state["pf_error"] = "Could not fetch this ASIN from Amazon."
        return
    st.session_state["pf_name"] = listing.title[:120]
    st.session_state["pf_price"] = listing.price
    st.session_state["pf_image"] = listing.image_url
    st.session_state["pf_link"] = listing.url


def render_admin(session: StorefrontSession):
    st.title("Portal")
    tab_inventory, tab_market, tab_brand, tab_mentor = st.tabs(
        ["Inventory Ops", "Marketplace Sync", "Settings", "Strategic Advisor"]
    )

    with tab_inventory:
        render_inventory_overview(session.products)
        st.divider()
        render_product_form(session)

    with tab_market:
        render_marketplace_sync(session)

    with tab_brand:
        render_settings_form(session)

    with tab_mentor:
        render_mentor()


def render_inventory_overview(products: list[Product]):
    summary = summarize_inventory(products)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Products", summary.total_products)
    col2.metric("Total Units", summary.total_units)
    col3.metric("Sellable Units", summary.sellable_units)
    col4.metric("Potential Profit", f"${summary.potential_profit:,.2f}")

    fig = px.bar(
        x=[STAGE_LABELS[s] for s in InventoryStage],
        y=[summary.stage_counts[s] for s in InventoryStage],
        labels={"x": "Stage", "y": "Products"},
        color=[STAGE_LABELS[s] for s in InventoryStage],
        color_discrete_sequence=px.colors.qualitative.Set2,
    )
    fig.update_layout(
        height=300,
        margin=dict(l=20, r=20, t=20, b=20),
        showlegend=False,
    )
    st.plotly_chart(fig, use_container_width=True)

    if summary.needs_review:
        st.warning("Review video required: " + ", ".join(summary.needs_review))


def render_product_form(session: StorefrontSession):
    _init_product_form()
    st.subheader("Asset Onboarding")

    error = st.session_state.pop("pf_error", None)
    if error:
        st.error(error)

    col1, col2 = st.columns(2)
    with col1:
        st.text_input("Asset Name", key="pf_name")
        st.number_input("MSRP ($)", min_value=0.0, step=0.01, key="pf_price")
        st.number_input("Cost ($)", min_value=0.0, step=0.01, key="pf_cost")
        st.selectbox("Category", [c.value for c in ProductCategory], key="pf_category")
    with col2:
        st.selectbox("Platform", [p.value for p in Platform], key="pf_platform")
        st.text_input("Amazon ASIN", key="pf_asin")
        st.button("Fill from Amazon", on_click=_on_lookup_asin)
        st.text_input("Affiliate Link", key="pf_link")
        st.text_input("Keywords / Vibe", key="pf_keywords")

    st.text_area("Strategic Overview", key="pf_description", height=120)
    c1, c2 = st.columns(2)
    c1.button("✨ AI Compose", on_click=_on_magic_write)
    c2.button("🖼 AI Image", on_click=_on_generate_image)

    st.text_input("Image URL", key="pf_image")
    if st.session_state["pf_image"]:
        st.image(st.session_state["pf_image"], width=200)

    if st.button("Save Asset", type="primary"):
        name = st.session_state["pf_name"].strip()
        if not name:
            st.error("Asset name is required.")
            return
        product = Product(
            id=str(int(time.time() * 1000)),
            name=name,
            price=float(st.session_state["pf_price"] or 0),
            cost_price=float(st.session_state["pf_cost"] or 0),
            category=ProductCategory(st.session_state["pf_category"]),
            description=st.session_state["pf_description"],
            image_url=st.session_state["pf_image"] or f"https://picsum.photos/seed/{name}/400/500",
            affiliate_link=st.session_state["pf_link"],
            platform=Platform(st.session_state["pf_platform"]),
            is_wishlist=True,
            is_received=False,
            asin=st.session_state["pf_asin"].strip() or None,
        )
        if session.save_product(product) is None:
            st.error("Could not save the product. Check the sync status.")
            return
        for key in PRODUCT_FORM_DEFAULTS:
            st.session_state.pop(key, None)
        st.success(f"{name} added to the hub.")
        st.rerun()


def render_marketplace_sync(session: StorefrontSession):
    st.subheader("Marketplace Sync")
    pending = [p for p in session.products if not p.is_marketplace_synced]
    if not pending:
        st.success("Every asset is live on the marketplace.")
        return

    for p in pending:
        status = compute_inventory(p)
        c1, c2 = st.columns([4, 1])
        c1.write(f"**{p.name}** · {STAGE_LABELS[status.stage]}")
        if c2.button("Promote", key=f"sync_{p.id}", disabled=not status.can_sell):
            session.sync_to_marketplace(p.id)
            st.toast("Promoted to the Constructive Marketplace! 🚀")
            st.rerun()


def render_settings_form(session: StorefrontSession):
    current = session.settings
    with st.form("shop_settings"):
        st.subheader("Brand Settings")
        store_name = st.text_input("Store Name", current.store_name)
        tagline = st.text_input("Tagline", current.tagline)
        hero_headline = st.text_input("Hero Headline", current.hero_headline)
        hero_subtext = st.text_area("Hero Subtext", current.hero_subtext)
        c1, c2, c3 = st.columns(3)
        primary = c1.color_picker("Primary", current.primary_color)
        secondary = c2.color_picker("Secondary", current.secondary_color)
        background = c3.color_picker("Background", current.background_color)
        tag = st.text_input("Amazon Associate Tag", current.amazon_affiliate_tag or "")

        if st.form_submit_button("Save Settings"):
            updated: ShopSettings = replace(
                current,
                store_name=store_name,
                tagline=tagline,
                hero_headline=hero_headline,
                hero_subtext=hero_subtext,
                primary_color=primary,
                secondary_color=secondary,
                background_color=background,
                amazon_affiliate_tag=tag.strip() or None,
            )
            if session.update_settings(updated):
                st.success("Settings saved.")
            else:
                st.error("Could not save settings.")


def render_mentor():
    mentor = st.session_state.setdefault("mentor", MentorChat())

    for turn in mentor.turns:
        with st.chat_message("user" if turn["role"] == "user" else "assistant"):
            st.write(turn["content"])

    with st.form("mentor_chat", clear_on_submit=True):
        question = st.text_input("Ask the Mentor")
        if st.form_submit_button("Send") and question.strip():
            with st.spinner("Thinking..."):
                mentor.send(question.strip())
            st.rerun()


if __name__ == "__main__":
    main()
