import pytest

from vitacare_e2e.ui_testing.framework.errors import (
    FallbacksExhausted,
    NavigationMismatch,
    OptionNotFound,
    ProductNotFound,
)
from vitacare_e2e.ui_testing.framework.fixture_data import ProfileData
from vitacare_e2e.ui_testing.framework.page_base import BasePage
from vitacare_e2e.ui_testing.pages import (
    AddToCartOutcome,
    CartPage,
    CheckoutPage,
    CustomerProfilePage,
    HomePage,
    LoginPage,
    OrderCompletedPage,
    ProductDetailsPage,
    SearchResultsPage,
)
from vitacare_e2e.unit.fakes import DummyConfig, FakeElement

BASE_URL = "https://vitacare.nop-station.com"


def add_location_popup(page, options=("Dhaka", "Banasree", "Chattogram")):
    page.add(".location-select label, .select-location label")
    page.add("#select2-SelectedCityId-container")
    page.add("#select2-SelectedAreaId-container")
    page.add(".select2-results__options")
    if options:
        page.add(".select2-results__option", *(FakeElement(text=f" {o} ") for o in options))
    return page.add("#saveButton")


# ================================================================================
# HomePage
# ================================================================================

async def test_close_alert_reports_presence(fake_page, make_page):
    home = make_page(HomePage)
    assert await home.close_alert() is False

    fake_page.add("#close-push-notification")
    assert await home.close_alert() is True


async def test_select_location_picks_exact_options(fake_page, make_page):
    save = add_location_popup(fake_page)
    home = make_page(HomePage)

    assert await home.select_location_and_continue("dhaka", "BANASREE") is home

    options = fake_page.elements[".select2-results__option"]
    assert [o.clicks for o in options] == [1, 1, 0]
    assert save.clicks == 1


async def test_select_location_falls_back_to_js_click(fake_page, make_page):
    add_location_popup(fake_page, options=())
    fake_page.add(".select2-results__option", FakeElement(text="Dhaka", click_error=True))
    fake_page.add(".select2-results__option", FakeElement(text="Banasree"))

    await make_page(HomePage).select_location_and_continue("Dhaka", "Banasree")

    dhaka = fake_page.elements[".select2-results__option"][0]
    assert (dhaka.clicks, dhaka.js_clicks) == (0, 1)


async def test_select_location_missing_option(fake_page, make_page):
    add_location_popup(fake_page)

    with pytest.raises(OptionNotFound) as excinfo:
        await make_page(HomePage).select_location_and_continue("Sylhet", "Banasree")

    assert excinfo.value.label == "Sylhet"
    assert excinfo.value.available == ("Dhaka", "Banasree", "Chattogram")


async def test_search_product_submits_query(fake_page, make_page):
    search_box = fake_page.add("#small-searchterms", FakeElement(value="old"))

    results = await make_page(HomePage).search_product("Air Freshener")

    assert isinstance(results, SearchResultsPage)
    assert search_box.value == "Air Freshener"
    assert search_box.pressed == ["Enter"]
    assert fake_page.visits == []


async def test_search_product_reloads_home_once(fake_page, make_page):
    fake_page.on_goto = lambda url: fake_page.add("#small-searchterms")

    await make_page(HomePage).search_product("Air Freshener")

    assert fake_page.visits == [f"{BASE_URL}/"]


async def test_search_product_exhausted(fake_page, make_page):
    with pytest.raises(FallbacksExhausted) as excinfo:
        await make_page(HomePage).search_product("Air Freshener")

    assert excinfo.value.last_strategy == "reload_and_retry"
    assert len(fake_page.visits) == 1


async def test_view_cart_falls_back_to_direct_navigation(fake_page, make_page):
    cart = await make_page(HomePage).view_cart()

    assert isinstance(cart, CartPage)
    assert fake_page.visits == [f"{BASE_URL}/cart"]


# ================================================================================
# LoginPage
# ================================================================================

async def test_login_flow_returns_home(fake_page, make_page):
    fake_page.add("#otp_login_Phone")
    fake_page.add("#btnOtpSendPopup", FakeElement(on_click=lambda: fake_page.add("#otp_login_Otp")))
    fake_page.add("#btnVerifyOtpPopup")
    login = make_page(LoginPage)

    await login.enter_phone_number("01700000000")
    assert not await login.is_otp_field_visible()
    await login.send_otp()
    await login.enter_otp("123456")
    home = await login.verify_otp()

    assert isinstance(home, HomePage)
    assert await login.get_phone_input_value() == "01700000000"
    assert await login.get_otp_input_value() == "123456"


# ================================================================================
# CustomerProfilePage
# ================================================================================

async def test_profile_opens_via_url_when_menu_missing(fake_page, make_page):
    fake_page.on_goto = lambda url: fake_page.add("#FirstName")

    profile = await make_page(CustomerProfilePage).go_to_customer_info()

    assert await profile.is_profile_page_loaded()
    assert fake_page.visits == [f"{BASE_URL}/customer/info"]


async def test_profile_not_reachable(fake_page, make_page):
    with pytest.raises(NavigationMismatch):
        await make_page(CustomerProfilePage).go_to_customer_info()


async def test_profile_update_and_read_back(fake_page, make_page):
    for selector in ("#FirstName", "#LastName", "#Email", "#Company"):
        fake_page.add(selector, FakeElement(value="stale"))
    save = fake_page.add("#save-info-button")
    profile = make_page(CustomerProfilePage)
    data = ProfileData("Jane", "Doe", "jane@x.com", "Acme")

    await profile.update_profile_info(data)

    assert save.clicks == 1
    assert await profile.read_profile() == data


# ================================================================================
# SearchResultsPage
# ================================================================================

async def test_best_matching_product_handles_spacing_variant(fake_page, make_page):
    fake_page.add(
        ".product-title",
        FakeElement(text="Vitacare Hand Wash 200 ml"),
        FakeElement(text="  Vitacare Air Freshener Anti-Tobacco Spray 300ml  "),
    )
    results = make_page(SearchResultsPage)

    product = await results.click_on_best_matching_product(
        "Vitacare Air Freshener Anti -Tobacco Spray 300 ml"
    )

    assert isinstance(product, ProductDetailsPage)
    assert [t.clicks for t in fake_page.elements[".product-title"]] == [0, 1]


async def test_no_matching_product(fake_page, make_page):
    fake_page.add(".product-title", FakeElement(text="Toothpaste"))
    results = make_page(SearchResultsPage)

    assert await results.is_product_displayed("toothpaste")
    with pytest.raises(ProductNotFound):
        await results.click_on_best_matching_product("Air Freshener")


# ================================================================================
# ProductDetailsPage
# ================================================================================

ADD_BUTTON = "[id*='add-to-cart-button']:not([onclick*='catalog'])"


async def test_add_to_cart_dismisses_popup(fake_page, make_page):
    fake_page.add(ADD_BUTTON, FakeElement(on_click=lambda: fake_page.add("#bar-notification .content")))
    close = fake_page.add("//span[@title='Close']")

    outcome = await make_page(ProductDetailsPage).add_to_cart()

    assert outcome is AddToCartOutcome.POPUP_DISMISSED
    assert close.clicks == 1


async def test_add_to_cart_escape_when_close_icon_missing(fake_page, make_page):
    fake_page.add(ADD_BUTTON)
    fake_page.add("#bar-notification .content")

    outcome = await make_page(ProductDetailsPage).add_to_cart()

    assert outcome is AddToCartOutcome.POPUP_DISMISSED
    assert fake_page.keyboard.pressed == ["Escape"]


async def test_add_to_cart_without_popup(fake_page, make_page):
    button = fake_page.add(ADD_BUTTON)

    outcome = await make_page(ProductDetailsPage).add_to_cart()

    assert outcome is AddToCartOutcome.NO_POPUP
    assert button.clicks == 1


async def test_popup_wait_and_open_shopping_cart(fake_page, make_page, clock):
    fake_page.add("#bar-notification .content")
    link = fake_page.add("//span[normalize-space()='Shopping cart']")
    product = make_page(ProductDetailsPage)

    await product.wait_for_popup_to_appear()
    cart = await product.open_shopping_cart()

    assert isinstance(cart, CartPage)
    assert link.clicks == 1
    assert clock.slept_ms == 1000


async def test_product_page_loaded_checks(fake_page, make_page):
    product = make_page(ProductDetailsPage)
    fake_page.add("body", FakeElement(text="Welcome"))
    fake_page.url = f"{BASE_URL}/search?q=x"
    assert not await product.is_product_details_page_loaded("Vitacare Air Freshener")

    fake_page.url = f"{BASE_URL}/vitacare-air-freshener-product"
    assert await product.is_product_details_page_loaded()

    fake_page.url = f"{BASE_URL}/"
    fake_page.elements["body"][0].text = "Buy VITACARE today"
    assert await product.is_product_details_page_loaded("Vitacare Air Freshener")


# ================================================================================
# CartPage / CheckoutPage
# ================================================================================

async def test_decrease_item_quantity(fake_page, make_page, clock):
    button = fake_page.add("div[id='shoppingCartItem_6949'] button[name='decrease']")

    await make_page(CartPage).decrease_item_quantity("6949", 3)

    assert button.clicks == 3
    assert clock.slept_ms == 3 * 150


async def test_adjust_quantities_clicks_each_item(fake_page, make_page):
    minus = fake_page.add(".qty-btn.qty-minus", FakeElement(), FakeElement())
    plus = fake_page.add(".qty-btn.qty-plus")

    await make_page(CartPage).adjust_quantities(minus_clicks_per_item=3, plus_clicks_per_item=1)

    assert [m.clicks for m in fake_page.elements[".qty-btn.qty-minus"]] == [3, 3]
    assert minus.clicks == 3 and plus.clicks == 1


async def test_proceed_to_checkout(fake_page, make_page):
    def navigate():
        fake_page.url = f"{BASE_URL}/onepagecheckout"

    fake_page.add("//button[normalize-space()='Go to cart']", FakeElement(on_click=navigate))

    checkout = await make_page(CartPage).proceed_to_checkout()

    assert isinstance(checkout, CheckoutPage)


async def test_proceed_to_checkout_detects_marker(fake_page, make_page):
    fake_page.add(
        "//button[normalize-space()='Go to cart']",
        FakeElement(on_click=lambda: fake_page.add(".page-checkout, .checkout-page, #checkout")),
    )
    fake_page.url = f"{BASE_URL}/cart"

    assert isinstance(await make_page(CartPage).proceed_to_checkout(), CheckoutPage)


async def test_proceed_to_checkout_mismatch(fake_page, make_page):
    fake_page.add("//button[normalize-space()='Go to cart']")
    fake_page.url = f"{BASE_URL}/cart"

    with pytest.raises(NavigationMismatch) as excinfo:
        await make_page(CartPage).proceed_to_checkout()

    assert excinfo.value.current_url == f"{BASE_URL}/cart"


async def test_checkout_codes_pickup_and_confirm(fake_page, make_page):
    discount = fake_page.add("#discountcouponcode")
    gift_card = fake_page.add("#giftcardcouponcode")
    for selector in ("#applydiscountcouponcode", "#applygiftcardcouponcode", "//label[normalize-space()='Pickup']"):
        fake_page.add(selector)
    fake_page.add(
        "#confirm-order-button",
        FakeElement(on_click=lambda: setattr(fake_page, "url", f"{BASE_URL}/checkout/completed/1")),
    )
    checkout = make_page(CheckoutPage)

    await checkout.apply_discount("test10")
    await checkout.apply_gift_card("5ba27cfd-a121")
    await checkout.select_pickup()
    completed = await checkout.confirm_order()

    assert (discount.value, gift_card.value) == ("test10", "5ba27cfd-a121")
    assert fake_page.clicks_on("//label[normalize-space()='Pickup']") == 1
    assert isinstance(completed, OrderCompletedPage)
    assert await completed.is_order_confirmed()


# ================================================================================
# Failure evidence
# ================================================================================

async def test_capture_failure_writes_screenshot(fake_page, settler, tmp_path):
    config = DummyConfig({"browser.screenshot_dir": str(tmp_path)})
    page_object = BasePage(fake_page, config=config, settler=settler)

    await page_object.capture_failure("test_step_15[chromium]", [{"url": "/api/cart", "status": 500}])

    shots = list(tmp_path.glob("*.png"))
    assert len(shots) == 1
    assert shots[0].name.startswith("failure_test_step_15_chromium_")
