"""
GROQ queries issued by the application.

Every query is parametrized with named variables ($id, $slug, $search)
so no user input is ever interpolated into query text.
"""

# Projection shared by cards and the detail page
_STARTUP_CARD_FIELDS = """
  _id,
  title,
  slug,
  _createdAt,
  author -> {
    _id, name, username, image, bio
  },
  views,
  description,
  category,
  image
"""

# All startups, newest first; $search == null disables filtering
STARTUPS_QUERY = f"""
*[_type == "startup" && defined(slug.current) && (
  !defined($search)
  || title match $search
  || category match $search
  || author->name match $search
)] | order(_createdAt desc) {{{_STARTUP_CARD_FIELDS}}}
"""

STARTUP_BY_ID_QUERY = f"""
*[_type == "startup" && _id == $id][0] {{{_STARTUP_CARD_FIELDS},
  pitch
}}
"""

STARTUPS_BY_AUTHOR_QUERY = f"""
*[_type == "startup" && author._ref == $id] | order(_createdAt desc) {{{_STARTUP_CARD_FIELDS}}}
"""

AUTHOR_BY_GITHUB_ID_QUERY = """
*[_type == "author" && id == $id][0] {
  _id, id, name, username, email, image, bio
}
"""

AUTHOR_BY_ID_QUERY = """
*[_type == "author" && _id == $id][0] {
  _id, id, name, username, email, image, bio
}
"""

PLAYLIST_BY_SLUG_QUERY = f"""
*[_type == "playlist" && slug.current == $slug][0] {{
  _id,
  title,
  slug,
  select[] -> {{{_STARTUP_CARD_FIELDS},
    pitch
  }}
}}
"""
