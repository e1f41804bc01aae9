"""HTTP tests for the Flask endpoints."""
import pytest

from conftest import FixedWordProvider
from word_game import create_app
from word_game.config import TestingConfig
from word_game.services import game_service as game_service_module
from word_game.services.game_service import initialize_game_service


@pytest.fixture
def service(store):
    service = initialize_game_service(FixedWordProvider("CRANE"), store)
    yield service
    game_service_module._game_service = None


@pytest.fixture
def client(service):
    app = create_app(TestingConfig)
    return app.test_client()


def new_game(client, **body):
    response = client.post('/api/new_game', json=body)
    assert response.status_code == 200
    return response.get_json()['game_id']


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    data = response.get_json()
    assert data['status'] == 'healthy'
    assert data['store'] == 'InMemoryGameStore'


def test_service_unavailable():
    app = create_app(TestingConfig)
    response = app.test_client().get('/api/health')
    assert response.status_code == 500
    assert response.get_json()['error'] == 'Game service unavailable'


def test_new_game_state(client):
    response = client.post('/api/new_game', json={'difficulty': 'hard'})
    data = response.get_json()
    assert data['success']
    state = data['state']
    assert state['word_length'] == 5
    assert state['max_attempts'] == 3
    assert state['answer'] is None
    assert state['status'] == 'PLAYING'


def test_new_game_rejects_bad_length(client):
    response = client.post('/api/new_game', json={'word_length': 99})
    assert response.status_code == 400


def test_new_game_without_words_of_length(client):
    response = client.post('/api/new_game', json={'word_length': 6})
    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'NO_WORDS_OF_LENGTH'


def test_typing_letters(client):
    game_id = new_game(client)
    client.post(f'/api/game/{game_id}/letter', json={'letter': 'c'})
    response = client.post(f'/api/game/{game_id}/letter', json={'letter': 'r'})
    assert response.get_json()['state']['current_guess'] == 'CR'

    response = client.delete(f'/api/game/{game_id}/letter')
    data = response.get_json()
    assert data['changed']
    assert data['state']['current_guess'] == 'C'

    response = client.post(f'/api/game/{game_id}/letter', json={'letter': '7'})
    assert response.status_code == 200
    assert response.get_json()['changed'] is False


def test_winning_game(client):
    game_id = new_game(client)

    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'trace'})
    data = response.get_json()
    assert data['success']
    assert data['state']['guess_results'][0] == [
        ['T', 'ABSENT'], ['R', 'CORRECT'], ['A', 'CORRECT'], ['C', 'PRESENT'], ['E', 'CORRECT']
    ]
    assert 'summary' not in data

    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'crane'})
    data = response.get_json()
    assert data['state']['won']
    assert data['state']['answer'] == 'CRANE'
    assert data['state']['score'] == 17
    assert data['summary']['attempts'] == 2
    assert data['summary']['share_text'].startswith('Word Game - Medium')

    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'slate'})
    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'GAME_OVER'


def test_invalid_guesses(client):
    game_id = new_game(client)

    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'abcde'})
    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'NOT_A_WORD'

    response = client.post(f'/api/game/{game_id}/guess', json={'guess': 'cr'})
    assert response.get_json()['error_code'] == 'INVALID_LENGTH'


def test_hint(client):
    game_id = new_game(client)
    response = client.post(f'/api/game/{game_id}/hint')
    data = response.get_json()
    assert data['success']
    assert data['hint']['letter'] in 'CRANE'
    assert data['state']['hints_used'] == 1
    assert data['state']['score'] == 14


def test_unknown_game_is_404(client):
    assert client.get('/api/game/nope/state').status_code == 404
    assert client.post('/api/game/nope/guess', json={'guess': 'crane'}).status_code == 404
    assert client.post('/api/game/nope/hint').status_code == 404
    assert client.delete('/api/game/nope').status_code == 404


def test_restart_and_delete(client):
    game_id = new_game(client)
    client.post(f'/api/game/{game_id}/guess', json={'guess': 'trace'})

    response = client.post(f'/api/game/{game_id}/restart', json={'difficulty': 'easy'})
    state = response.get_json()['state']
    assert state['guesses'] == []
    assert state['max_attempts'] == 7

    assert client.delete(f'/api/game/{game_id}').status_code == 200
    assert client.get(f'/api/game/{game_id}/state').status_code == 404


def test_resume(client, service):
    assert client.post('/api/resume').status_code == 404

    game_id = new_game(client)
    client.post(f'/api/game/{game_id}/guess', json={'guess': 'trace'})

    response = client.post('/api/resume')
    data = response.get_json()
    assert data['game_id'] == game_id
    assert len(service.sessions) == 1
    assert data['state']['guesses'] == ['TRACE']


def test_settings(client):
    response = client.get('/api/settings')
    assert response.get_json()['settings']['difficulty'] == 'medium'

    response = client.put('/api/settings', json={'difficulty': 'hard', 'dark_mode': True})
    settings = response.get_json()['settings']
    assert settings['difficulty'] == 'hard'
    assert settings['dark_mode'] is True
    assert settings['word_length'] == 5

    game_id = new_game(client)
    assert client.get(f'/api/game/{game_id}/state').get_json()['state']['max_attempts'] == 3

    assert client.put('/api/settings', json={'word_length': 1}).status_code == 400


def test_statistics_and_history(client):
    game_id = new_game(client)
    client.post(f'/api/game/{game_id}/guess', json={'guess': 'crane'})

    data = client.get('/api/statistics').get_json()
    assert data['statistics']['games_won'] == 1
    assert data['statistics']['guess_distribution'] == {'1': 1}
    assert 'Games Played: 1' in data['summary']

    history = client.get('/api/history?difficulty=medium').get_json()['history']
    assert len(history) == 1
    assert history[0]['target_word'] == 'CRANE'
    assert 'duration_text' in history[0]
    assert client.get('/api/history?difficulty=hard').get_json()['history'] == []

    assert client.delete('/api/statistics').get_json()['success']
    assert client.get('/api/statistics').get_json()['statistics']['games_played'] == 0


def test_reset_settings(client):
    client.put('/api/settings', json={'difficulty': 'easy', 'word_length': 4})

    response = client.delete('/api/settings')

    assert response.status_code == 200
    assert response.get_json()['settings']['difficulty'] == 'medium'
    assert client.get('/api/settings').get_json()['settings']['word_length'] == 5


def test_word_analysis(client):
    data = client.get('/api/words/analysis').get_json()
    assert data['success']
    assert data['frequency']['by_length'] == {'5': 1}
    assert data['frequency']['by_first_letter'] == {'c': 1}
    assert data['statistics']['length_range'] == [5, 5]
