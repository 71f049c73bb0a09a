"""Reusable HTML fragments: navbar, footer, cards, dialogs."""
from __future__ import annotations

import json
from html import escape
from urllib.parse import quote

from ..schemas.listings import Listing
from ..services.i18n import LANGUAGE_NAMES, switch_locale_path
from .context import PageContext

PLACEHOLDER_IMAGE = (
    "data:image/svg+xml;utf8,<svg xmlns=%27http://www.w3.org/2000/svg%27 viewBox=%270 0 4 3%27>"
    "<rect width=%274%27 height=%273%27 fill=%27%23e2e8f0%27/></svg>"
)


def attr(value: object) -> str:
    return escape(str(value), quote=True)


def script_json(value: object) -> str:
    """JSON safe to embed inside a <script> element."""

    return json.dumps(value).replace("<", "\\u003c")


def format_price(listing: Listing) -> str:
    amount = f"{listing.price:,.0f}"
    prefix = "$" if listing.currency.upper() == "USD" else f"{listing.currency} "
    suffix = "/mo" if listing.is_rent else ""
    return f"{prefix}{amount}{suffix}"


def format_number(value: float) -> str:
    return f"{value:g}" if value != int(value) else f"{int(value):,}"


def status_label(ctx: PageContext, listing: Listing) -> str:
    if listing.is_sold:
        return ctx.t("houses.detail.sold")
    if listing.is_rent:
        return ctx.t("houses.forRent")
    if listing.home_status == "FOR_SALE":
        return ctx.t("houses.forSale")
    return listing.home_status.replace("_", " ").title()


def favorite_button(ctx: PageContext, listing: Listing, *, favorited: bool) -> str:
    """Heart toggle; disabled on the owner's own listings."""

    detail_t = ctx.t.scoped("houses.detail")
    owner = listing.is_owned_by(ctx.auth_session.user_id)
    if owner:
        title = detail_t("cantFavoriteOwnProperty")
    elif favorited:
        title = detail_t("removeFromFavorites")
    else:
        title = detail_t("addToFavorites")
    classes = "rounded-full border p-2 transition"
    if owner:
        classes += " cursor-not-allowed border-gray-300 bg-gray-300 text-gray-500 opacity-60"
    elif favorited:
        classes += " border-red-500 bg-red-500 text-white"
    else:
        classes += " border-gray-200 bg-white/90 text-gray-600 hover:text-red-500"
    disabled = " disabled" if owner else ""
    url = ctx.href(f"/favorites/{quote(listing.id, safe='')}/toggle")
    return (
        f'<button type="button" class="{classes}" title="{attr(title)}" data-favorite-toggle '
        f'data-url="{attr(url)}" data-favorited="{"true" if favorited else "false"}"{disabled}>'
        f'<span aria-hidden="true">{"♥" if favorited else "♡"}</span></button>'
    )


def listing_card(ctx: PageContext, listing: Listing, *, favorited: bool) -> str:
    t = ctx.t.scoped("houses")
    image = listing.picture_urls[0] if listing.picture_urls else PLACEHOLDER_IMAGE
    detail_href = ctx.href(f"/houses/{quote(listing.id, safe='')}")
    if listing.is_sold:
        action = f'<button class="w-full rounded bg-slate-300 py-2 text-slate-600" disabled>{escape(t("soldOut"))}</button>'
    else:
        label = t("viewRental") if listing.is_rent else t("viewDetails")
        action = (
            f'<a class="block w-full rounded bg-slate-900 py-2 text-center text-white" '
            f'href="{attr(detail_href)}">{escape(label)}</a>'
        )
    return f"""
<article class="overflow-hidden rounded-xl border bg-white shadow-sm" data-listing-id="{attr(listing.id)}">
  <div class="relative">
    <img src="{attr(image)}" alt="{attr(listing.street_address)}" class="h-48 w-full object-cover" loading="lazy"/>
    <span class="absolute left-3 top-3 rounded bg-slate-900/80 px-2 py-1 text-xs text-white">{escape(status_label(ctx, listing))}</span>
    <span class="absolute left-3 top-10 rounded bg-white/90 px-2 py-1 text-xs">{escape(listing.home_type)}</span>
    <div class="absolute right-3 top-3">{favorite_button(ctx, listing, favorited=favorited)}</div>
  </div>
  <div class="space-y-2 p-4">
    <p class="text-xl font-semibold">{escape(format_price(listing))}</p>
    <p class="font-medium">{escape(listing.street_address)}</p>
    <p class="text-sm text-slate-500">{escape(listing.city)}, {escape(listing.state)} {escape(listing.zipcode)}</p>
    <div class="flex gap-4 text-sm text-slate-600">
      <span>{listing.bedrooms} {escape(t("beds"))}</span>
      <span>{format_number(listing.bathrooms)} {escape(t("baths"))}</span>
      <span>{format_number(listing.living_area)} {escape(t("sqft"))}</span>
    </div>
    <p class="text-xs text-slate-400">{escape(t("listed"))}: {escape(listing.date_posted_string)}</p>
    {action}
  </div>
</article>"""


def static_map(ctx: PageContext, center: tuple[float, float], listings: list[Listing]) -> str:
    """Embedded OpenStreetMap view centred on ``center``."""

    lat, lng = center
    span = 0.05
    bbox = f"{lng - span},{lat - span},{lng + span},{lat + span}"
    src = f"https://www.openstreetmap.org/export/embed.html?bbox={bbox}&layer=mapnik&marker={lat},{lng}"
    markers = [
        {"id": item.id, "title": item.street_address, "lat": item.latitude, "lng": item.longitude}
        for item in listings
        if item.latitude is not None and item.longitude is not None
    ]
    return f"""
<section class="overflow-hidden rounded-xl border" aria-label="{attr(ctx.t("houses.map"))}">
  <iframe class="h-72 w-full" src="{attr(src)}" loading="lazy" title="{attr(ctx.t("houses.map"))}"></iframe>
  <script type="application/json" data-map-markers>{script_json(markers)}</script>
</section>"""


def notices_script(ctx: PageContext) -> str:
    payload = [notice.model_dump() for notice in ctx.notices]
    return f'<script type="application/json" id="pending-notices">{script_json(payload)}</script>'


def navbar(ctx: PageContext) -> str:
    t = ctx.t.scoped("navbar")
    links = [
        ("allProperties", ctx.href("/houses")),
        ("buy", ctx.href("/houses?purpose=buy")),
        ("rent", ctx.href("/houses?purpose=rent")),
    ]
    nav_links = "".join(
        f'<a class="hover:text-slate-900" href="{attr(href)}">{escape(t(label))}</a>' for label, href in links
    )
    languages = "".join(
        f'<a class="block px-3 py-1 {"font-semibold" if code == ctx.locale else ""}" '
        f'href="{attr(switch_locale_path(ctx.path, code))}">{escape(name)}</a>'
        for code, name in LANGUAGE_NAMES.items()
    )
    if ctx.auth_session.is_authenticated:
        user = ctx.auth_session.user
        display = escape((user.name or user.email or "") if user else "")
        account = f"""
      <details class="relative">
        <summary class="cursor-pointer list-none">{display}</summary>
        <div class="absolute right-0 mt-2 w-48 rounded border bg-white py-2 shadow">
          <a class="block px-3 py-1" href="{attr(ctx.href("/dashboard"))}">{escape(t("dashboard"))}</a>
          <a class="block px-3 py-1" href="{attr(ctx.href("/profile"))}">{escape(t("profile"))}</a>
          <a class="block px-3 py-1" href="{attr(ctx.href("/favorites"))}">{escape(t("favorites"))}</a>
          <form method="post" action="{attr(ctx.href("/auth/signout"))}">
            <input type="hidden" name="next" value="{attr(ctx.path)}"/>
            <button class="block w-full px-3 py-1 text-left text-red-600" type="submit">{escape(t("signOut"))}</button>
          </form>
        </div>
      </details>"""
    else:
        account = (
            f'<button type="button" class="rounded bg-slate-900 px-3 py-1 text-white" '
            f'data-open-dialog="auth-dialog">{escape(t("signIn"))}</button>'
        )
    return f"""
<header class="border-b bg-white">
  <div class="mx-auto flex max-w-7xl items-center justify-between px-4 py-3">
    <button type="button" class="md:hidden" data-open-dialog="mobile-menu" aria-label="{attr(t("menu"))}">☰</button>
    <a class="text-lg font-bold" href="{attr(ctx.href("/houses"))}">Rent&amp;Home</a>
    <nav class="hidden gap-6 text-sm text-slate-600 md:flex">{nav_links}</nav>
    <div class="flex items-center gap-4 text-sm">
      <details class="relative">
        <summary class="cursor-pointer list-none">{escape(t("language"))}: {escape(ctx.locale.upper())}</summary>
        <div class="absolute right-0 mt-2 w-40 rounded border bg-white py-2 shadow">{languages}</div>
      </details>
      {account}
    </div>
  </div>
  <dialog id="mobile-menu" class="rounded-xl p-6">
    <h2 class="font-semibold">{escape(t("menu"))}</h2>
    <p class="mb-4 text-sm text-slate-500">{escape(t("menuDescription"))}</p>
    <nav class="flex flex-col gap-2">{nav_links}</nav>
    <hr class="my-4"/>
    <div class="flex flex-col gap-1">{languages}</div>
  </dialog>
  {auth_dialog(ctx) if not ctx.auth_session.is_authenticated else ""}
</header>"""


def auth_dialog(ctx: PageContext) -> str:
    """Sign in / sign up modal; the two forms swap in place."""

    t = ctx.t.scoped("auth")
    return f"""
<dialog id="auth-dialog" class="w-full max-w-md rounded-xl p-6">
  <form method="post" action="{attr(ctx.href("/auth/signin"))}" class="space-y-3" data-auth-form="signin">
    <h2 class="text-lg font-semibold">{escape(t("signInTitle"))}</h2>
    <input type="hidden" name="next" value="{attr(ctx.path)}"/>
    <input class="w-full rounded border px-3 py-2" type="email" name="email" placeholder="{attr(t("email"))}" required/>
    <input class="w-full rounded border px-3 py-2" type="password" name="password" placeholder="{attr(t("password"))}" required/>
    <button class="w-full rounded bg-slate-900 py-2 text-white" type="submit">{escape(t("submitSignIn"))}</button>
    <button class="w-full text-sm text-slate-500" type="button" data-swap-auth>{escape(t("noAccount"))}</button>
  </form>
  <form method="post" action="{attr(ctx.href("/auth/signup"))}" class="hidden space-y-3" data-auth-form="signup">
    <h2 class="text-lg font-semibold">{escape(t("signUpTitle"))}</h2>
    <input type="hidden" name="next" value="{attr(ctx.path)}"/>
    <input class="w-full rounded border px-3 py-2" name="name" placeholder="{attr(t("name"))}" required/>
    <input class="w-full rounded border px-3 py-2" type="email" name="email" placeholder="{attr(t("email"))}" required/>
    <input class="w-full rounded border px-3 py-2" type="password" name="password" placeholder="{attr(t("password"))}" required/>
    <button class="w-full rounded bg-slate-900 py-2 text-white" type="submit">{escape(t("submitSignUp"))}</button>
    <button class="w-full text-sm text-slate-500" type="button" data-swap-auth>{escape(t("haveAccount"))}</button>
  </form>
</dialog>"""


def footer(ctx: PageContext) -> str:
    t = ctx.t.scoped("footer")
    paragraphs = "".join(
        f'<p>{escape(t(key))}</p>'
        for key in ("brokerageInfo", "newYorkProcedures", "newYorkHousing", "trecInfo", "canadaInfo")
    )
    return f"""
<footer class="mt-16 border-t bg-white">
  <div class="mx-auto max-w-7xl space-y-2 px-4 py-8 text-xs text-slate-500">
    <p>{escape(t("accessibilityDescription"))}. {escape(t("letUsKnow"))}</p>
    {paragraphs}
    <p>&copy; Rent&amp;Home. {escape(t("rights"))}</p>
  </div>
</footer>"""


def booking_dialog(ctx: PageContext, listing: Listing, *, default_name: str) -> str:
    """Viewing request form; submitted as JSON by the page script."""

    t = ctx.t.scoped("booking")
    email = ctx.auth_session.user.email if ctx.auth_session.user else ""
    action = ctx.href(f"/houses/{quote(listing.id, safe='')}/booking")
    return f"""
<button type="button" class="w-full rounded bg-slate-900 py-3 text-white" data-open-dialog="booking-dialog">{escape(t("scheduleViewing"))}</button>
<dialog id="booking-dialog" class="w-full max-w-md rounded-xl p-6">
  <form class="space-y-3" data-booking-form action="{attr(action)}" data-scheduling-label="{attr(t("scheduling"))}">
    <h2 class="text-lg font-semibold">{escape(t("title"))}</h2>
    <p class="text-sm text-slate-500">{escape(t("selectDateTime"))}</p>
    <label class="block text-sm">{escape(t("dateTime"))}
      <input class="mt-1 w-full rounded border px-3 py-2" type="datetime-local" name="date"/></label>
    <label class="block text-sm">{escape(t("name"))}
      <input class="mt-1 w-full rounded border px-3 py-2" name="name" value="{attr(default_name)}" placeholder="{attr(t("yourName"))}"/></label>
    <label class="block text-sm">{escape(t("phone"))}
      <input class="mt-1 w-full rounded border px-3 py-2" name="phone" placeholder="+1 (555) 123-4567"/></label>
    <label class="block text-sm">{escape(t("email"))}
      <input class="mt-1 w-full rounded border bg-slate-100 px-3 py-2" value="{attr(email or "")}" readonly/></label>
    <div class="flex justify-end gap-2">
      <button type="button" class="rounded border px-4 py-2" data-close-dialog>{escape(t("cancel"))}</button>
      <button type="submit" class="rounded bg-slate-900 px-4 py-2 text-white">{escape(t("scheduleViewing"))}</button>
    </div>
  </form>
</dialog>"""
