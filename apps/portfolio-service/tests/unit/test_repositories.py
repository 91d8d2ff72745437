from portfolio.db import models, schemas
from portfolio.db.repositories import categories as category_repo
from portfolio.db.repositories import portfolios as portfolio_repo
from portfolio.db.repositories import projects as project_repo
from portfolio.db.repositories import section_contents as content_repo
from portfolio.db.repositories import sections as section_repo


def _tree(db, owner="1"):
    p = portfolio_repo.create_portfolio(db, schemas.PortfolioCreate(title="Main"), owner)
    c = category_repo.create_category(db, schemas.CategoryCreate(title="Web", portfolio_id=p.id), owner)
    pr = project_repo.create_project(
        db, schemas.ProjectCreate(title="Shop", description="d", category_id=c.id, skills=["python"]), owner
    )
    s = section_repo.create_section(db, schemas.SectionCreate(title="About", type="about", portfolio_id=p.id), owner)
    sc = content_repo.create_section_content(db, schemas.SectionContentCreate(section_id=s.id, content="Hi"), owner)
    return p, c, pr, s, sc


def test_delete_portfolio_cascades_to_descendants(db_session):
    p, c, pr, s, sc = _tree(db_session)
    assert portfolio_repo.delete_portfolio(db_session, p.id) is True
    for model in (models.Category, models.Project, models.Section, models.SectionContent):
        assert db_session.query(model).count() == 0


def test_delete_missing_returns_false(db_session):
    assert portfolio_repo.delete_portfolio(db_session, 123) is False
    assert project_repo.delete_project(db_session, 123) is False
    assert content_repo.delete_section_content(db_session, 123) is False


def test_next_positions_follow_highest_sibling(db_session):
    p, c, pr, s, sc = _tree(db_session)
    assert category_repo.next_category_position(db_session, p.id) == 1
    assert project_repo.next_project_position(db_session, c.id) == 1
    assert section_repo.next_section_position(db_session, p.id) == 1
    assert content_repo.next_content_order(db_session, s.id) == 1
    assert content_repo.next_content_order(db_session, 999) == 0

    category_repo.update_category_position(db_session, c.id, 9)
    assert category_repo.next_category_position(db_session, p.id) == 10


def test_duplicate_checks_exclude_self(db_session):
    p, c, pr, s, sc = _tree(db_session)
    assert portfolio_repo.check_duplicate_portfolio(db_session, "Main", "1") is True
    assert portfolio_repo.check_duplicate_portfolio(db_session, "Main", "1", exclude_id=p.id) is False
    assert portfolio_repo.check_duplicate_portfolio(db_session, "Main", "2") is False
    assert project_repo.check_duplicate_project(db_session, "Shop", c.id, exclude_id=pr.id) is False
    assert section_repo.check_duplicate_section(db_session, "About", p.id) is True
    assert content_repo.check_duplicate_order(db_session, s.id, 0) is True
    assert content_repo.check_duplicate_order(db_session, s.id, 0, exclude_id=sc.id) is False


def test_update_uses_only_set_fields(db_session):
    p, *_ = _tree(db_session)
    portfolio_repo.update_portfolio(db_session, p.id, schemas.PortfolioUpdate(description="New"))
    refreshed = portfolio_repo.get_portfolio(db_session, p.id)
    assert refreshed.title == "Main"
    assert refreshed.description == "New"


def test_skill_and_client_search(db_session):
    p, c, pr, s, sc = _tree(db_session)
    project_repo.create_project(
        db_session,
        schemas.ProjectCreate(title="Cli", description="d", category_id=c.id, skills=["rust"], client="Acme"),
        "1",
    )
    assert [x.title for x in project_repo.get_projects_by_skills(db_session, ["rust", "python"])] == ["Shop", "Cli"]
    assert project_repo.get_projects_by_skills(db_session, ["", None]) == []
    assert [x.title for x in project_repo.get_projects_by_client(db_session, "Acme")] == ["Cli"]


def test_reorder_contents_applies_all(db_session):
    p, c, pr, s, sc = _tree(db_session)
    other = content_repo.create_section_content(
        db_session, schemas.SectionContentCreate(section_id=s.id, content="Second"), "1"
    )
    rows = content_repo.reorder_contents(db_session, {sc.id: 1, other.id: 0})
    assert [r.content for r in rows] == ["Second", "Hi"]
    assert content_repo.reorder_contents(db_session, {}) == []


def test_sections_by_type_and_owner(db_session):
    p, c, pr, s, sc = _tree(db_session)
    assert [x.id for x in section_repo.get_sections_by_type(db_session, "about")] == [s.id]
    assert section_repo.get_sections_by_owner(db_session, "2") == []
    loaded = section_repo.get_section_with_contents(db_session, s.id)
    assert [x.content for x in loaded.contents] == ["Hi"]


def test_list_helpers_order_by_id_and_page(db_session):
    p, c, pr, s, sc = _tree(db_session)
    second = portfolio_repo.create_portfolio(db_session, schemas.PortfolioCreate(title="Side"), "2")
    third = portfolio_repo.create_portfolio(db_session, schemas.PortfolioCreate(title="Old"), "1")

    assert [x.id for x in portfolio_repo.list_portfolios(db_session)] == [p.id, second.id, third.id]
    assert [x.id for x in portfolio_repo.list_portfolios(db_session, skip=1, limit=1)] == [second.id]
    assert portfolio_repo.list_portfolios(db_session, skip=3) == []

    extra = category_repo.create_category(
        db_session, schemas.CategoryCreate(title="Print", portfolio_id=p.id, position=0), "1"
    )
    assert [x.id for x in category_repo.list_categories(db_session)] == [c.id, extra.id]
    assert [x.id for x in category_repo.list_categories(db_session, skip=1, limit=5)] == [extra.id]

    assert [x.id for x in project_repo.list_projects(db_session, limit=1)] == [pr.id]
    assert project_repo.list_projects(db_session, skip=1) == []

    other = section_repo.create_section(
        db_session, schemas.SectionCreate(title="Skills", type="skills", portfolio_id=p.id), "1"
    )
    assert [x.id for x in section_repo.list_sections(db_session)] == [s.id, other.id]
    assert [x.id for x in section_repo.list_sections(db_session, skip=0, limit=1)] == [s.id]


def test_position_updates_reorder_siblings(db_session):
    p, c, pr, s, sc = _tree(db_session)
    later = project_repo.create_project(
        db_session, schemas.ProjectCreate(title="Blog", description="d", category_id=c.id), "1"
    )
    assert [x.id for x in project_repo.get_projects_by_category(db_session, c.id)] == [pr.id, later.id]

    moved = project_repo.update_project_position(db_session, pr.id, 5)
    assert moved.position == 5
    assert [x.id for x in project_repo.get_projects_by_category(db_session, c.id)] == [later.id, pr.id]
    assert project_repo.update_project_position(db_session, 999, 1) is None

    skills = section_repo.create_section(
        db_session, schemas.SectionCreate(title="Skills", type="skills", portfolio_id=p.id), "1"
    )
    assert section_repo.update_section_position(db_session, s.id, 3).position == 3
    assert [x.id for x in section_repo.get_sections_by_portfolio(db_session, p.id)] == [skills.id, s.id]
    assert section_repo.update_section_position(db_session, 999, 1) is None


def test_relationship_ties_fall_back_to_creation_order(db_session):
    p, c, pr, s, sc = _tree(db_session)
    tied = section_repo.create_section(
        db_session, schemas.SectionCreate(title="Contact", type="contact", portfolio_id=p.id, position=0), "1"
    )
    tied_category = category_repo.create_category(
        db_session, schemas.CategoryCreate(title="Print", portfolio_id=p.id, position=0), "1"
    )
    db_session.expire_all()

    loaded = portfolio_repo.get_portfolio_with_relations(db_session, p.id)
    assert [x.id for x in loaded.sections] == [s.id, tied.id]
    assert [x.id for x in loaded.categories] == [c.id, tied_category.id]
