"""
RAG answer prompt.

Instructs the model to answer strictly from retrieved context.

Dependencies: langchain_core.prompts
System role: Prompt template for answer generation
"""

from langchain_core.prompts import ChatPromptTemplate

NOT_FOUND_ANSWER = "I cannot find the answer in the provided documents."

SYSTEM_PROMPT = (
    "You are a helpful assistant. Answer the user's question based ONLY on the provided context. "
    f"If the answer cannot be found in the context, say '{NOT_FOUND_ANSWER}'\n\n"
    "Context:\n{context}"
)

RAG_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", "{question}"),
])
