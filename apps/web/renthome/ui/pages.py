"""Full-page renderers for the locale-prefixed routes."""
from __future__ import annotations

from html import escape
from urllib.parse import urlencode

from ..schemas.auth import UserStats
from ..schemas.listings import Listing
from ..services.filters import (
    BATHROOM_OPTIONS,
    BEDROOM_OPTIONS,
    DEFAULT_AREA_RANGE,
    DEFAULT_PRICE_RANGE,
    PROPERTY_TYPES,
    STATUS_OPTIONS,
    FilterState,
    map_center,
)
from .components import (
    attr,
    booking_dialog,
    favorite_button,
    footer,
    format_number,
    format_price,
    listing_card,
    navbar,
    notices_script,
    static_map,
    status_label,
)
from .context import PageContext

PAGE_SCRIPT = """
<script>
  const toastRoot = document.getElementById('toasts');

  function showToast(notice) {
    const el = document.createElement('div');
    const tone = notice.level === 'error' ? 'bg-red-600' : notice.level === 'loading' ? 'bg-slate-700' : 'bg-emerald-600';
    el.className = `rounded-lg px-4 py-2 text-sm text-white shadow ${tone}`;
    el.textContent = `${notice.icon ? notice.icon + ' ' : ''}${notice.message}`;
    toastRoot.appendChild(el);
    setTimeout(() => el.remove(), notice.duration_ms || 4000);
  }

  JSON.parse(document.getElementById('pending-notices').textContent).forEach(showToast);

  document.querySelectorAll('[data-open-dialog]').forEach((button) => {
    button.addEventListener('click', () => document.getElementById(button.dataset.openDialog).showModal());
  });
  document.querySelectorAll('[data-close-dialog]').forEach((button) => {
    button.addEventListener('click', () => button.closest('dialog').close());
  });
  document.querySelectorAll('[data-swap-auth]').forEach((button) => {
    button.addEventListener('click', () => {
      document.querySelectorAll('[data-auth-form]').forEach((form) => form.classList.toggle('hidden'));
    });
  });

  function paintFavorite(button, favorited) {
    button.dataset.favorited = favorited ? 'true' : 'false';
    button.querySelector('span').textContent = favorited ? '\\u2665' : '\\u2661';
    button.classList.toggle('bg-red-500', favorited);
    button.classList.toggle('text-white', favorited);
  }

  document.querySelectorAll('[data-favorite-toggle]').forEach((button) => {
    button.addEventListener('click', async (event) => {
      event.preventDefault();
      const previous = button.dataset.favorited === 'true';
      if (document.body.dataset.authenticated === 'true') {
        paintFavorite(button, !previous);
      }
      button.disabled = true;
      try {
        const response = await fetch(button.dataset.url, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ favorited: previous }),
        });
        const result = await response.json();
        paintFavorite(button, result.favorited);
        showToast(result.notice);
      } catch (error) {
        console.error('Error toggling favorite:', error);
        paintFavorite(button, previous);
      } finally {
        button.disabled = false;
      }
    });
  });

  document.querySelectorAll('[data-booking-form]').forEach((form) => {
    form.addEventListener('submit', async (event) => {
      event.preventDefault();
      const submit = form.querySelector('button[type=submit]');
      const label = submit.textContent;
      submit.disabled = true;
      submit.textContent = form.dataset.schedulingLabel;
      const data = new FormData(form);
      try {
        const response = await fetch(form.action, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ date: data.get('date') || null, name: data.get('name'), phone: data.get('phone') }),
        });
        const result = await response.json();
        showToast(result.notice);
        if (response.ok) {
          form.reset();
          form.closest('dialog').close();
        }
      } catch (error) {
        console.error('Error scheduling viewing:', error);
      } finally {
        submit.disabled = false;
        submit.textContent = label;
      }
    });
  });
</script>
"""


def render_layout(ctx: PageContext, *, title: str, body: str) -> str:
    """Wrap ``body`` with the document shell, navbar, footer and toasts."""

    meta_t = ctx.t.scoped("meta")
    authenticated = "true" if ctx.auth_session.is_authenticated else "false"
    return f"""<!DOCTYPE html>
<html lang="{attr(ctx.locale)}">
<head>
  <meta charset="UTF-8"/>
  <meta name="viewport" content="width=device-width, initial-scale=1.0"/>
  <meta name="description" content="{attr(meta_t("description"))}"/>
  <title>{escape(title)} | {escape(meta_t("title"))}</title>
  <script src="https://cdn.tailwindcss.com"></script>
</head>
<body class="min-h-screen bg-slate-50 font-sans text-slate-900 antialiased" data-authenticated="{authenticated}">
  {navbar(ctx)}
  <main class="mx-auto max-w-7xl px-4 py-8">
    {body}
  </main>
  {footer(ctx)}
  <div id="toasts" class="fixed inset-x-0 top-4 z-50 flex flex-col items-center gap-2"></div>
  {notices_script(ctx)}
  {PAGE_SCRIPT}
</body>
</html>"""


def _checkboxes(name: str, options: tuple, selected: frozenset, label=str) -> str:
    return "".join(
        f'<label class="mr-3 inline-flex items-center gap-1 text-sm">'
        f'<input type="checkbox" name="{name}" value="{attr(option)}"{" checked" if option in selected else ""}/>'
        f"{escape(label(option))}</label>"
        for option in options
    )


def _radios(name: str, options: tuple, selected: frozenset, label=str) -> str:
    return "".join(
        f'<label class="mr-3 inline-flex items-center gap-1 text-sm">'
        f'<input type="radio" name="{name}" value="{attr(option)}"{" checked" if option in selected else ""}/>'
        f"{escape(label(option))}</label>"
        for option in options
    )


def _filter_form(ctx: PageContext, state: FilterState, purpose: str | None) -> str:
    t = ctx.t.scoped("houses")
    status_names = {"FOR_SALE": t("forSale"), "FOR_RENT": t("forRent")}
    purpose_input = f'<input type="hidden" name="purpose" value="{attr(purpose)}"/>' if purpose else ""
    badge = f" ({state.active_count})" if state.active_count else ""
    return f"""
<form method="get" action="{attr(ctx.href("/houses"))}" class="mb-6 flex flex-wrap gap-3">
  {purpose_input}
  <input class="flex-1 rounded-full border px-4 py-2" type="search" name="q" value="{attr(state.search)}" placeholder="{attr(t("searchPlaceholder"))}"/>
  <button class="rounded-full border px-4 py-2" type="submit">{escape(t("search"))}</button>
  <button class="rounded-full border px-4 py-2" type="button" data-open-dialog="filter-dialog">{escape(t("filters"))}{badge}</button>
  <dialog id="filter-dialog" class="w-full max-w-lg rounded-xl p-6">
    <h2 class="text-lg font-semibold">{escape(t("filterProperties"))}</h2>
    <p class="mb-4 text-sm text-slate-500">{escape(t("filterDescription"))}</p>
    <fieldset class="mb-3"><legend class="font-medium">{escape(t("priceRange"))}</legend>
      <input class="w-32 rounded border px-2 py-1" type="number" min="0" step="1000" name="price_min" value="{state.price_min:.0f}"/>
      <input class="w-32 rounded border px-2 py-1" type="number" min="0" step="1000" name="price_max" value="{state.price_max:.0f}"/>
      <span class="text-xs text-slate-500">{DEFAULT_PRICE_RANGE[1]:,.0f}+</span>
    </fieldset>
    <fieldset class="mb-3"><legend class="font-medium">{escape(t("areaRange"))}</legend>
      <input class="w-32 rounded border px-2 py-1" type="number" min="0" step="100" name="area_min" value="{state.area_min:.0f}"/>
      <input class="w-32 rounded border px-2 py-1" type="number" min="0" step="100" name="area_max" value="{state.area_max:.0f}"/>
      <span class="text-xs text-slate-500">{DEFAULT_AREA_RANGE[1]:,.0f}+</span>
    </fieldset>
    <fieldset class="mb-3"><legend class="font-medium">{escape(t("bedrooms"))}</legend>
      {_checkboxes("bedrooms", BEDROOM_OPTIONS, state.bedrooms)}
    </fieldset>
    <fieldset class="mb-3"><legend class="font-medium">{escape(t("bathrooms"))}</legend>
      {_checkboxes("bathrooms", BATHROOM_OPTIONS, state.bathrooms)}
    </fieldset>
    <fieldset class="mb-3"><legend class="font-medium">{escape(t("propertyType"))}</legend>
      {_radios("type", PROPERTY_TYPES, state.property_types)}
    </fieldset>
    <fieldset class="mb-4"><legend class="font-medium">{escape(t("status"))}</legend>
      {_radios("status", STATUS_OPTIONS, state.statuses, label=lambda value: status_names[value])}
    </fieldset>
    <div class="flex justify-end gap-2">
      <button class="rounded border px-4 py-2" type="submit" name="clear" value="1">{escape(t("clearFilters"))}</button>
      <button class="rounded bg-slate-900 px-4 py-2 text-white" type="submit">{escape(t("applyFilters"))}</button>
    </div>
  </dialog>
</form>"""


def _grid(ctx: PageContext, listings: list[Listing], favorite_ids: set[str]) -> str:
    cards = "".join(listing_card(ctx, item, favorited=item.id in favorite_ids) for item in listings)
    return f'<div class="grid gap-6 sm:grid-cols-2 lg:grid-cols-3">{cards}</div>'


def render_listings_page(
    ctx: PageContext,
    *,
    title: str,
    listings: list[Listing],
    state: FilterState,
    favorite_ids: set[str],
    purpose: str | None,
    load_failed: bool = False,
) -> str:
    """Collection view: search bar, filter dialog, map and cards."""

    t = ctx.t.scoped("houses")
    if load_failed:
        content = f'<p class="py-16 text-center text-slate-500">{escape(t("failedToLoad"))}</p>'
    elif not listings:
        content = f'<p class="py-16 text-center text-slate-500" data-empty>{escape(t("noResults"))}</p>'
    else:
        content = static_map(ctx, map_center(listings), listings) + '<div class="h-6"></div>' + _grid(
            ctx, listings, favorite_ids
        )
    body = f"""
<h1 class="mb-2 text-3xl font-bold">{escape(title)}</h1>
<p class="mb-6 text-sm text-slate-500" data-result-count="{len(listings)}">{escape(t("results", count=len(listings)))}</p>
{_filter_form(ctx, state, purpose)}
{content}"""
    return render_layout(ctx, title=title, body=body)


def render_detail_page(
    ctx: PageContext,
    listing: Listing,
    *,
    similar: list[Listing],
    is_favorite: bool,
    default_name: str,
) -> str:
    t = ctx.t.scoped("houses.detail")
    if listing.is_rent:
        back = f'<a class="text-sm text-slate-500" href="{attr(ctx.href("/houses?purpose=rent"))}">&larr; {escape(t("backToRentals"))}</a>'
    else:
        back = f'<a class="text-sm text-slate-500" href="{attr(ctx.href("/houses"))}">&larr; {escape(t("backToListings"))}</a>'

    heart = ""
    if ctx.auth_session.is_authenticated:
        heart = f'<div class="absolute right-3 top-3">{favorite_button(ctx, listing, favorited=is_favorite)}</div>'

    photos = listing.picture_urls
    if photos:
        slides = "".join(
            f'<img src="{attr(url)}" alt="{attr(listing.street_address)}" class="h-96 w-full flex-none snap-center object-cover"/>'
            for url in photos
        )
        gallery = "".join(
            f'<img src="{attr(url)}" alt="{attr(listing.street_address)}" class="mb-4 w-full rounded"/>' for url in photos
        )
        carousel = f"""
<div class="relative">
  <div class="flex snap-x overflow-x-auto rounded-xl">{slides}</div>
  <button type="button" class="absolute right-16 top-3 rounded bg-white/90 px-3 py-1 text-sm" data-open-dialog="photos-dialog">{escape(t("viewAllPhotos"))}</button>
  {heart}
</div>
<dialog id="photos-dialog" class="w-full max-w-4xl rounded-xl p-6">
  <button type="button" class="float-right" data-close-dialog>&times;</button>
  {gallery}
</dialog>"""
    else:
        carousel = f"""
<div class="relative">
  <div class="flex h-64 items-center justify-center rounded-xl bg-slate-200 text-slate-500">{escape(t("noPhotos"))}</div>
  {heart}
</div>"""

    badges = [
        f'<span class="rounded bg-slate-900 px-2 py-1 text-xs text-white">{escape(status_label(ctx, listing))}</span>',
        f'<span class="rounded bg-slate-200 px-2 py-1 text-xs">{escape(t("listed"))}: {escape(listing.date_posted_string)}</span>',
    ]
    if listing.price_per_area is not None:
        badges.append(
            f'<span class="rounded border px-2 py-1 text-xs" data-price-per-area>${listing.price_per_area:,}{escape(t("perSqft"))}</span>'
        )

    facts = [
        ("bedrooms", str(listing.bedrooms)),
        ("bathrooms", format_number(listing.bathrooms)),
        ("livingArea", f"{format_number(listing.living_area)} {ctx.t('houses.sqft')}"),
        ("yearBuilt", str(listing.year_built or "—")),
        ("homeType", listing.home_type or "—"),
        ("neighborhood", listing.neighborhood or "—"),
        ("community", listing.community or "—"),
        ("subdivision", listing.subdivision or "—"),
    ]
    if listing.zpid is not None:
        facts.append(("zpid", str(listing.zpid)))
    fact_items = "".join(
        f'<div class="rounded border bg-white p-3"><dt class="text-xs text-slate-500">{escape(t(key))}</dt>'
        f'<dd class="font-medium">{escape(value)}</dd></div>'
        for key, value in facts
    )

    if similar:
        similar_section = _grid(ctx, similar, set())
    else:
        similar_section = f'<p class="text-sm text-slate-500">{escape(t("noSimilarHomes"))}</p>'

    disabled_action = '<button type="button" class="w-full rounded bg-slate-300 py-3 text-slate-600" {marker} disabled>{label}</button>'
    if listing.is_owned_by(ctx.auth_session.user_id):
        action = disabled_action.format(marker="data-owner-notice", label=escape(t("youPostedThisProperty")))
    elif listing.is_sold:
        action = disabled_action.format(marker="data-sold-notice", label=escape(t("sold")))
    else:
        action = booking_dialog(ctx, listing, default_name=default_name)

    body = f"""
<div class="mb-4">{back}</div>
{carousel}
<section class="mt-6 space-y-2">
  <h1 class="text-3xl font-bold">{escape(format_price(listing))}</h1>
  <p class="text-slate-600">{escape(listing.full_address)}</p>
  <div class="flex flex-wrap gap-2">{"".join(badges)}</div>
</section>
<section class="mt-6">
  <h2 class="mb-2 text-xl font-semibold">{escape(t("description"))}</h2>
  <p class="whitespace-pre-line text-slate-700">{escape(listing.description)}</p>
</section>
<section class="mt-6">
  <h2 class="mb-2 text-xl font-semibold">{escape(t("details"))}</h2>
  <dl class="grid grid-cols-2 gap-3 md:grid-cols-4">{fact_items}</dl>
</section>
<section class="mt-6">
  <h2 class="mb-2 text-xl font-semibold">{escape(t("location"))}</h2>
  {static_map(ctx, map_center([listing]), [listing])}
</section>
<div class="mt-6">{action}</div>
<section class="mt-10">
  <h2 class="mb-4 text-xl font-semibold">{escape(t("similarHomes"))}</h2>
  {similar_section}
</section>"""
    return render_layout(ctx, title=listing.street_address or t("notFound"), body=body)


def render_collection_page(
    ctx: PageContext,
    *,
    title: str,
    listings: list[Listing],
    favorite_ids: set[str],
    empty_message: str,
) -> str:
    """Favorites and dashboard pages: a titled grid or an empty message."""

    if listings:
        content = _grid(ctx, listings, favorite_ids)
    else:
        content = f'<p class="py-16 text-center text-slate-500" data-empty>{escape(empty_message)}</p>'
    body = f'<h1 class="mb-6 text-3xl font-bold">{escape(title)}</h1>{content}'
    return render_layout(ctx, title=title, body=body)


def render_profile_page(ctx: PageContext, *, stats: UserStats, editing: bool) -> str:
    t = ctx.t.scoped("profile")
    user = ctx.auth_session.user
    name = user.name if user and user.name else ""
    email = user.email if user and user.email else ""
    if editing:
        form = f"""
<form method="post" action="{attr(ctx.href("/profile"))}" class="mt-6 space-y-3">
  <label class="block text-sm">{escape(t("name"))}<input class="mt-1 w-full rounded border px-3 py-2" name="name" value="{attr(name)}"/></label>
  <label class="block text-sm">{escape(t("currentPassword"))}<input class="mt-1 w-full rounded border px-3 py-2" type="password" name="current_password"/></label>
  <label class="block text-sm">{escape(t("newPassword"))}<input class="mt-1 w-full rounded border px-3 py-2" type="password" name="new_password"/></label>
  <label class="block text-sm">{escape(t("confirmPassword"))}<input class="mt-1 w-full rounded border px-3 py-2" type="password" name="confirm_password"/></label>
  <div class="flex gap-2">
    <button class="rounded bg-slate-900 px-4 py-2 text-white" type="submit">{escape(t("save"))}</button>
    <a class="rounded border px-4 py-2" href="{attr(ctx.href("/profile"))}">{escape(t("cancel"))}</a>
  </div>
</form>"""
    else:
        form = f'<a class="mt-6 inline-block rounded border px-4 py-2" href="{attr(ctx.href("/profile") + "?" + urlencode({"edit": 1}))}">{escape(t("edit"))}</a>'
    body = f"""
<a class="text-sm text-slate-500" href="{attr(ctx.href("/houses"))}">&larr; {escape(t("backToListings"))}</a>
<h1 class="mt-4 text-3xl font-bold">{escape(t("title"))}</h1>
<dl class="mt-6 grid gap-4 md:grid-cols-2">
  <div><dt class="text-xs text-slate-500">{escape(t("name"))}</dt><dd class="font-medium">{escape(name)}</dd></div>
  <div><dt class="text-xs text-slate-500">{escape(t("email"))}</dt><dd class="font-medium">{escape(email)}</dd></div>
  <div><dt class="text-xs text-slate-500">{escape(t("totalHouses"))}</dt><dd class="text-2xl font-semibold" data-total-houses>{stats.total_houses}</dd></div>
  <div><dt class="text-xs text-slate-500">{escape(t("totalFavorites"))}</dt><dd class="text-2xl font-semibold" data-total-favorites>{stats.total_favorites}</dd></div>
</dl>
{form}"""
    return render_layout(ctx, title=t("title"), body=body)


def render_not_found(ctx: PageContext, *, message: str | None = None) -> str:
    t = ctx.t.scoped("errors")
    body = f"""
<div class="py-24 text-center">
  <h1 class="text-3xl font-bold">{escape(t("notFoundTitle"))}</h1>
  <p class="mt-2 text-slate-500">{escape(message or t("notFoundBody"))}</p>
  <a class="mt-6 inline-block rounded bg-slate-900 px-4 py-2 text-white" href="{attr(ctx.href("/houses"))}">{escape(t("backHome"))}</a>
</div>"""
    return render_layout(ctx, title=t("notFoundTitle"), body=body)
