"""Progress dashboard summaries: levels, gems, mastery and weak subskills."""
from naplan_tutor.bank import QuestionBank
from naplan_tutor.models import DOMAINS, MAX_LEVEL
from naplan_tutor.storage import Storage


def get_mastery_label(status: str) -> str:
    return {"mastered": "MASTERED", "learning": "LEARNING"}.get(status, "NEW")


def get_mastery_color(status: str) -> str:
    return {"mastered": "green", "learning": "yellow"}.get(status, "dim")


def get_level_stars(level: int) -> str:
    return "★" * level + "☆" * (MAX_LEVEL - level)


def get_domain_summary(storage: Storage, bank: QuestionBank) -> list[dict]:
    progress = storage.get_progress()
    mastery = storage.all_mastery()
    results = []
    for domain in DOMAINS:
        subskills = bank.subskills(domain)
        statuses = [mastery[s].status if s in mastery else "unseen" for s in subskills]
        results.append({
            "domain": domain,
            "level": progress.level_for(domain),
            "subskills": len(subskills),
            "mastered": statuses.count("mastered"),
            "learning": statuses.count("learning"),
            "review_queue": sum(
                len(mastery[s].scheduled_review_queue) for s in subskills if s in mastery
            ),
        })
    return results


def get_weak_subskills(storage: Storage, threshold: float = 70.0) -> list[dict]:
    """Subskills answered below ``threshold`` percent, worst first."""
    weak = []
    for row in storage.subskill_accuracy():
        score = round((row["correct"] / row["total"]) * 100, 1)
        if score < threshold:
            weak.append({**row, "score": score})
    return sorted(weak, key=lambda r: (r["score"], r["subskill"]))


def get_stats(storage: Storage) -> dict:
    progress = storage.get_progress()
    rows = storage.subskill_accuracy()
    answered = sum(r["total"] for r in rows)
    correct = sum(r["correct"] for r in rows)
    return {
        "total_gems": progress.total_gems,
        "answers": answered,
        "accuracy": round(correct / answered * 100, 1) if answered else 0.0,
        "mission_in_progress": storage.get_session() is not None,
    }
