"""
Integration tests for Pods API endpoints.

Tests cover:
- Pod listing, creation, detail and deletion
- Invitations and responses
- Commitments, progress and messages
- Error status codes and messages
"""
import pytest


TEST_USER_ID = "test-user"


@pytest.fixture
def pod_repo(fake_repos):
    repo = fake_repos["pod_repo"]
    repo.seed_pod("pod-1", name="Morning Crew", creator_id=TEST_USER_ID)
    repo.seed_member("pod-1", TEST_USER_ID, display_name="Tester")
    repo.seed_member("pod-1", "friend", display_name="Friend")
    return repo


@pytest.mark.integration
class TestPodsEndpoints:
    def test_list_pods(self, client, pod_repo):
        response = client.get("/pods")

        assert response.status_code == 200
        pods = response.json()["pods"]
        assert [p["id"] for p in pods] == ["pod-1"]
        assert pods[0]["member_count"] == 2

    def test_list_pods_empty(self, client):
        response = client.get("/pods")
        assert response.status_code == 200
        assert response.json() == {"pods": []}

    def test_create_pod(self, client, fake_repos):
        response = client.post("/pods", json={"name": "Night Owls", "description": "Late lifts"})

        assert response.status_code == 201
        pod = response.json()["pod"]
        assert pod["name"] == "Night Owls"
        assert pod["creator_id"] == TEST_USER_ID
        assert pod["members"][0]["user_id"] == TEST_USER_ID

    def test_create_pod_invalid_name(self, client):
        response = client.post("/pods", json={"name": "X"})

        assert response.status_code == 400
        assert response.json() == {"detail": "Pod name must be between 2-50 characters"}

    def test_get_pod_detail(self, client, pod_repo):
        response = client.get("/pods/pod-1")

        assert response.status_code == 200
        pod = response.json()["pod"]
        assert pod["name"] == "Morning Crew"
        assert len(pod["members_progress"]) == 2
        assert pod["recent_messages"] == []

    def test_get_pod_not_member(self, client, fake_repos):
        fake_repos["pod_repo"].seed_pod("pod-2", creator_id="someone")

        response = client.get("/pods/pod-2")

        assert response.status_code == 404
        assert response.json()["detail"] == "Pod not found or access denied"

    def test_delete_pod(self, client, pod_repo):
        response = client.delete("/pods/pod-1")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Pod deleted"}
        assert pod_repo.get_pod("pod-1") is None

    def test_delete_pod_not_creator(self, client, fake_repos):
        repo = fake_repos["pod_repo"]
        repo.seed_pod("pod-2", creator_id="someone")
        repo.seed_member("pod-2", TEST_USER_ID)

        response = client.delete("/pods/pod-2")

        assert response.status_code == 403


@pytest.mark.integration
class TestInviteEndpoints:
    def test_invite_member(self, client, pod_repo, fake_repos):
        fake_repos["profile_repo"].seed([{"id": "newbie", "username": "newbie", "display_name": "Newbie"}])

        response = client.post("/pods/pod-1/invite", json={"username": "newbie"})

        assert response.status_code == 200
        assert response.json()["message"] == "Invitation sent to Newbie"
        invite = fake_repos["invite_repo"].list_pending_invites("newbie")[0]
        assert invite["inviter_id"] == TEST_USER_ID

    def test_invite_unknown_user(self, client, pod_repo):
        response = client.post("/pods/pod-1/invite", json={"username": "ghost"})
        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    def test_list_and_accept_invite(self, client, fake_repos):
        repo = fake_repos["pod_repo"]
        repo.seed_pod("pod-2", name="Lunch Club", creator_id="someone")
        repo.seed_member("pod-2", "someone")
        fake_repos["invite_repo"].seed([
            {"id": "inv-1", "pod_id": "pod-2", "pod_name": "Lunch Club", "invitee_id": TEST_USER_ID},
        ])

        invites = client.get("/pods/invites").json()["invites"]
        assert [i["id"] for i in invites] == ["inv-1"]

        response = client.post("/pods/invites/inv-1", json={"action": "accept"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "You joined Lunch Club!"}
        assert repo.get_membership("pod-2", TEST_USER_ID)["status"] == "active"

    def test_invalid_invite_action(self, client):
        response = client.post("/pods/invites/inv-1", json={"action": "ignore"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid action"


@pytest.mark.integration
class TestCommitmentEndpoints:
    def test_set_commitment_reflected_in_progress(self, client, pod_repo, fake_repos):
        response = client.post("/pods/pod-1/commitment", json={"workouts_per_week": 3})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["commitment"]["workouts_per_week"] == 3

        progress = client.get("/pods/pod-1/progress").json()["members_progress"]
        mine = next(p for p in progress if p["user_id"] == TEST_USER_ID)
        assert mine["commitment"] == 3
        assert len(fake_repos["event_repo"].of_type("pod_commitment_made")) == 1

    @pytest.mark.parametrize("value", [0, 8, "four", True, None])
    def test_invalid_commitment(self, client, pod_repo, value):
        response = client.post("/pods/pod-1/commitment", json={"workouts_per_week": value})
        assert response.status_code == 400

    def test_commitment_requires_membership(self, client, fake_repos):
        fake_repos["pod_repo"].seed_pod("pod-2", creator_id="someone")

        response = client.post("/pods/pod-2/commitment", json={"workouts_per_week": 3})

        assert response.status_code == 403
        assert response.json()["detail"] == "Not a member of this pod"


@pytest.mark.integration
class TestMembershipEndpoints:
    def test_creator_cannot_leave(self, client, pod_repo):
        response = client.post("/pods/pod-1/leave")
        assert response.status_code == 400

    def test_member_leaves(self, client, fake_repos):
        repo = fake_repos["pod_repo"]
        repo.seed_pod("pod-2", name="Lunch Club", creator_id="someone")
        repo.seed_member("pod-2", "someone")
        repo.seed_member("pod-2", TEST_USER_ID)

        response = client.post("/pods/pod-2/leave")

        assert response.status_code == 200
        assert response.json()["message"] == "You left Lunch Club"

    def test_send_message(self, client, pod_repo, fake_repos):
        response = client.post("/pods/pod-1/messages", json={"message": "Great week!", "recipient_id": "friend"})

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"]["id"]
        assert fake_repos["message_repo"].messages[0]["recipient_id"] == "friend"

    def test_message_too_long(self, client, pod_repo):
        response = client.post("/pods/pod-1/messages", json={"message": "x" * 281})
        assert response.status_code == 400
        assert response.json()["detail"] == "Message must be 1-280 characters"


@pytest.mark.integration
class TestPodsAuth:
    def test_requires_authentication(self, unauthenticated_client):
        response = unauthenticated_client.get("/pods")
        assert response.status_code == 401
