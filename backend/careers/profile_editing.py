"""
Profile editing as a single pure reducer.

A draft profile document is edited by folding tagged edits over it:

    draft = apply_edits(document, [
        {'op': 'add_entry', 'section': 'experience', 'entry': {...}},
        {'op': 'set_skills', 'index': 0, 'skills': ['Python', 'SQL']},
    ])

Nothing here touches the database or Django; every function returns a new
document and leaves its input unchanged. Saving the result goes through
``careers.profile_store.replace_profile``.
"""
import copy
from typing import Any, Callable, Dict, Iterable, List

SECTIONS = ('education', 'experience', 'skills', 'projects', 'certifications')
SCALAR_FIELDS = (
    'full_name', 'email', 'phone', 'linkedin_url', 'github_url', 'location', 'headline', 'summary',
)


class ProfileEditError(ValueError):
    """An edit that cannot be applied to the draft it was given."""


def empty_document() -> Dict[str, Any]:
    document = {name: '' for name in SCALAR_FIELDS}
    document.update({section: [] for section in SECTIONS})
    return document


def _section(document, edit) -> List[Dict[str, Any]]:
    section = edit.get('section')
    if section not in SECTIONS:
        raise ProfileEditError(f"Unknown section '{section}'.")
    entries = document.get(section)
    if entries is None:
        entries = document[section] = []
    if not isinstance(entries, list):
        raise ProfileEditError(f"Section '{section}' must be a list.")
    return entries


def _index(entries, value, *, allow_end=False) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ProfileEditError('Entry index must be an integer.')
    upper = len(entries) if allow_end else len(entries) - 1
    if value < 0 or value > upper:
        raise ProfileEditError(f'Entry index {value} is out of range.')
    return value


def _entry(entries, value):
    entry = entries[_index(entries, value)]
    if not isinstance(entry, dict):
        raise ProfileEditError(f'Entry {value} must be an object.')
    return entry


def _with_count(category):
    category['count'] = len(category.get('skills') or [])
    return category


def _add_entry(document, edit):
    entries = _section(document, edit)
    entry = edit.get('entry')
    if not isinstance(entry, dict):
        raise ProfileEditError('add_entry needs an entry object.')
    entry = dict(entry)
    if edit['section'] == 'skills':
        _with_count(entry)
    position = edit.get('index', len(entries))
    entries.insert(_index(entries, position, allow_end=True), entry)


def _remove_entry(document, edit):
    entries = _section(document, edit)
    del entries[_index(entries, edit.get('index'))]


def _update_entry(document, edit):
    entries = _section(document, edit)
    changes = edit.get('changes')
    if not isinstance(changes, dict):
        raise ProfileEditError('update_entry needs a changes object.')
    entry = _entry(entries, edit.get('index'))
    entry.update(changes)
    if edit['section'] == 'skills':
        _with_count(entry)


def _move_entry(document, edit):
    entries = _section(document, edit)
    source = _index(entries, edit.get('from_index'))
    target = _index(entries, edit.get('to_index'))
    entries.insert(target, entries.pop(source))


def _set_field(document, edit):
    field = edit.get('field')
    if field not in SCALAR_FIELDS:
        raise ProfileEditError(f"Unknown profile field '{field}'.")
    value = edit.get('value')
    document[field] = '' if value is None else value


def _set_skills(document, edit):
    categories = _section(document, {'section': 'skills'})
    skills = edit.get('skills')
    if not isinstance(skills, list):
        raise ProfileEditError('set_skills needs a list of skills.')
    category = _entry(categories, edit.get('index'))
    category['skills'] = list(skills)
    _with_count(category)


REDUCERS: Dict[str, Callable[[Dict[str, Any], Dict[str, Any]], None]] = {
    'add_entry': _add_entry,
    'remove_entry': _remove_entry,
    'update_entry': _update_entry,
    'move_entry': _move_entry,
    'set_field': _set_field,
    'set_skills': _set_skills,
}


def apply_edit(document: Dict[str, Any], edit: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``document`` with ``edit`` applied."""
    if not isinstance(edit, dict):
        raise ProfileEditError('Each edit must be an object.')
    reducer = REDUCERS.get(edit.get('op'))
    if reducer is None:
        raise ProfileEditError(f"Unknown edit operation '{edit.get('op')}'.")
    draft = copy.deepcopy(document)
    reducer(draft, edit)
    return draft


def apply_edits(document: Dict[str, Any], edits: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    draft = copy.deepcopy(document)
    for position, edit in enumerate(edits):
        try:
            draft = apply_edit(draft, edit)
        except ProfileEditError as exc:
            raise ProfileEditError(f'Edit {position + 1}: {exc}') from exc
    return draft
