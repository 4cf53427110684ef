"""
Tests for the profile editing reducer. No database access needed.
"""
import pytest

from careers.profile_editing import ProfileEditError, apply_edit, apply_edits, empty_document


def sample_document():
    document = empty_document()
    document['full_name'] = 'Asha Rao'
    document['experience'] = [
        {'company_name': 'Acme', 'job_title': 'SDE I', 'bullets': ['Built APIs']},
        {'company_name': 'Globex', 'job_title': 'Intern', 'bullets': ['Wrote tests']},
    ]
    document['skills'] = [{'name': 'Languages', 'skills': ['Python'], 'count': 1}]
    return document


class TestApplyEdit:

    def test_input_is_not_mutated(self):
        document = sample_document()
        apply_edit(document, {'op': 'remove_entry', 'section': 'experience', 'index': 0})
        assert len(document['experience']) == 2

    def test_add_entry_appends_by_default(self):
        entry = {'title': 'Job board', 'bullets': ['Django']}
        result = apply_edit(sample_document(), {'op': 'add_entry', 'section': 'projects', 'entry': entry})
        assert result['projects'] == [entry]

    def test_add_entry_at_index(self):
        entry = {'company_name': 'Initech', 'job_title': 'SDE II', 'bullets': ['Led migration']}
        result = apply_edit(sample_document(), {'op': 'add_entry', 'section': 'experience', 'entry': entry, 'index': 0})
        assert [e['company_name'] for e in result['experience']] == ['Initech', 'Acme', 'Globex']

    def test_update_entry_merges_changes(self):
        result = apply_edit(sample_document(), {
            'op': 'update_entry', 'section': 'experience', 'index': 1, 'changes': {'job_title': 'SDE I'},
        })
        assert result['experience'][1] == {'company_name': 'Globex', 'job_title': 'SDE I', 'bullets': ['Wrote tests']}

    def test_move_entry(self):
        result = apply_edit(sample_document(), {
            'op': 'move_entry', 'section': 'experience', 'from_index': 1, 'to_index': 0,
        })
        assert [e['company_name'] for e in result['experience']] == ['Globex', 'Acme']

    def test_set_field(self):
        result = apply_edit(sample_document(), {'op': 'set_field', 'field': 'headline', 'value': 'Engineer'})
        assert result['headline'] == 'Engineer'

    def test_set_skills_recomputes_count(self):
        result = apply_edit(sample_document(), {'op': 'set_skills', 'index': 0, 'skills': ['Python', 'Go', 'Rust']})
        assert result['skills'][0]['skills'] == ['Python', 'Go', 'Rust']
        assert result['skills'][0]['count'] == 3

    def test_updating_skills_through_update_entry_keeps_count_in_sync(self):
        result = apply_edit(sample_document(), {
            'op': 'update_entry', 'section': 'skills', 'index': 0, 'changes': {'skills': [], 'count': 9},
        })
        assert result['skills'][0]['count'] == 0

    @pytest.mark.parametrize('edit', [
        {'op': 'explode'},
        {'op': 'add_entry', 'section': 'hobbies', 'entry': {}},
        {'op': 'add_entry', 'section': 'projects', 'entry': 'not a dict'},
        {'op': 'remove_entry', 'section': 'experience', 'index': 2},
        {'op': 'remove_entry', 'section': 'experience', 'index': -1},
        {'op': 'update_entry', 'section': 'experience', 'index': 0},
        {'op': 'move_entry', 'section': 'experience', 'from_index': 0, 'to_index': 5},
        {'op': 'set_field', 'field': 'user_id', 'value': 'x'},
        {'op': 'set_skills', 'index': 0, 'skills': 'Python'},
    ])
    def test_invalid_edits_raise(self, edit):
        with pytest.raises(ProfileEditError):
            apply_edit(sample_document(), edit)

    @pytest.mark.parametrize('edit', [
        {'op': 'add_entry', 'section': 'education', 'entry': {'institution': 'IIT'}},
        {'op': 'remove_entry', 'section': 'education', 'index': 0},
        {'op': 'move_entry', 'section': 'education', 'from_index': 0, 'to_index': 0},
    ])
    def test_section_that_is_not_a_list_raises(self, edit):
        document = sample_document()
        document['education'] = 'oops'
        with pytest.raises(ProfileEditError, match='must be a list'):
            apply_edit(document, edit)

    def test_entry_that_is_not_an_object_raises(self):
        document = sample_document()
        document['skills'] = ['Python']
        with pytest.raises(ProfileEditError, match='must be an object'):
            apply_edit(document, {'op': 'set_skills', 'index': 0, 'skills': ['Go']})
        with pytest.raises(ProfileEditError, match='must be an object'):
            apply_edit(document, {'op': 'update_entry', 'section': 'skills', 'index': 0, 'changes': {}})

    def test_edit_that_is_not_an_object_raises(self):
        with pytest.raises(ProfileEditError):
            apply_edit(sample_document(), ['add_entry'])


class TestApplyEdits:

    def test_edits_apply_in_order(self):
        result = apply_edits(sample_document(), [
            {'op': 'remove_entry', 'section': 'experience', 'index': 0},
            {'op': 'update_entry', 'section': 'experience', 'index': 0, 'changes': {'job_title': 'SDE'}},
        ])
        assert result['experience'] == [{'company_name': 'Globex', 'job_title': 'SDE', 'bullets': ['Wrote tests']}]

    def test_error_names_failing_edit(self):
        with pytest.raises(ProfileEditError, match='Edit 2'):
            apply_edits(sample_document(), [
                {'op': 'set_field', 'field': 'location', 'value': 'Pune'},
                {'op': 'remove_entry', 'section': 'education', 'index': 0},
            ])
