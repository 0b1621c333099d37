from models import Base, PollSubmission
from db import engine
from questions import poll_config
from sqlalchemy.orm import Session
from datetime import datetime, timedelta
import random
import sys

TOTAL = 40

# Criar tabelas
Base.metadata.create_all(bind=engine)

# Conectar ao banco
db = Session(bind=engine)
rng = random.Random(2024)


def resposta_aleatoria(index):
    question = poll_config.question(index)
    labels = question.labels
    if not question.multi_select:
        return rng.choice(labels)
    opcoes = [label for label in labels if label != "None"]
    limite = question.max_select or 3
    return ",".join(rng.sample(opcoes, rng.randint(1, min(limite, len(opcoes)))))


try:
    # Limpar dados anteriores
    db.query(PollSubmission).delete()
    db.commit()
    print("✅ Banco limpo")

    agora = datetime.utcnow()
    for i in range(TOTAL):
        valores = {
            poll_config.field_for(index): resposta_aleatoria(index)
            for index in range(len(poll_config))
        }
        if valores["q9"] == "Yes":
            valores["q9_ages"] = "4, 9"
        if valores["q18"] == "Other":
            valores["q18_other"] = "Parrot"
        db.add(PollSubmission(
            email=f"morador{i}@gmail.com" if i % 3 == 0 else None,
            created_at=agora - timedelta(hours=rng.randint(0, 24 * 14)),
            **valores,
        ))

    db.commit()
    print(f"✅ Submissões criadas ({TOTAL} respostas)")
    print("\n✅✅✅ BANCO POPULADO COM SUCESSO! ✅✅✅")

except Exception as e:
    print(f"❌ Erro: {e}")
    db.rollback()
    sys.exit(1)

finally:
    db.close()
